"""Abstract repository for StockAdjustment ledger entries.

Adjustments are append-only: implementations reject ``update``. The only
field that may change after creation is the stock-applied marker, through
``mark_applied``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storeops.domain.model.stock_adjustment import StockAdjustment


class StockAdjustmentRepository(ABC):

    @abstractmethod
    async def get_all(self) -> list[StockAdjustment]:
        """Return every adjustment."""

    @abstractmethod
    async def get_by_id(self, adjustment_id: int) -> StockAdjustment:
        """Return an adjustment, or raise EntityNotFoundError."""

    @abstractmethod
    async def create(self, adjustment: StockAdjustment) -> StockAdjustment:
        """Record a new adjustment, stamping its id and timestamp."""

    @abstractmethod
    async def update(
        self, adjustment_id: int, changes: dict[str, Any]
    ) -> StockAdjustment:
        """Always raises ValidationError; ledger entries are immutable."""

    @abstractmethod
    async def mark_applied(self, adjustment_id: int) -> StockAdjustment:
        """Record that this adjustment's stock change has landed on the product."""

    @abstractmethod
    async def delete(self, adjustment_id: int) -> bool:
        """Remove an adjustment, or raise EntityNotFoundError."""
