"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storeops.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    async def get_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Order:
        """Return an order, or raise EntityNotFoundError."""

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Store a composed order, assigning its id and order number."""

    @abstractmethod
    async def update(self, order_id: int, changes: dict[str, Any]) -> Order:
        """Merge *changes* into a stored order."""

    @abstractmethod
    async def delete(self, order_id: int) -> bool:
        """Remove an order, or raise EntityNotFoundError."""
