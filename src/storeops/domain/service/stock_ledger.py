"""Domain service: Stock Ledger.

Pure functions over a product's stock count. Nothing here performs I/O;
the inventory coordinator is responsible for persisting the results.

Stock health buckets, for a threshold ``t``:

    LOW     stock <= t
    MEDIUM  t < stock <= 2t
    HIGH    stock > 2t
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.value_objects import Money

if TYPE_CHECKING:
    from storeops.domain.model.product import Product

logger = logging.getLogger(__name__)


class StockLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: str | StockLevel) -> StockLevel:
        if isinstance(value, StockLevel):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown stock level '{value}'") from None


def _check_threshold(threshold: int) -> None:
    if threshold < 0:
        raise ValidationError("Low-stock threshold cannot be negative")


def classify(stock: int, threshold: int) -> StockLevel:
    _check_threshold(threshold)
    if stock <= threshold:
        return StockLevel.LOW
    if stock <= 2 * threshold:
        return StockLevel.MEDIUM
    return StockLevel.HIGH


def is_low(stock: int, threshold: int) -> bool:
    _check_threshold(threshold)
    return stock <= threshold


def apply_delta(current_stock: int, delta: int) -> int:
    """Return ``current_stock + delta``.

    The result is not clamped. A negative count is legitimate while a
    correction is being reconciled, so it is only reported as a warning.
    """
    new_stock = current_stock + delta
    if new_stock < 0:
        logger.warning(
            "Stock goes negative: %d %+d -> %d", current_stock, delta, new_stock
        )
    return new_stock


# --- Aggregates over a catalog snapshot --------------------------------------


def filter_by_level(products: Iterable[Product], level: StockLevel) -> list[Product]:
    return [
        p for p in products
        if classify(p.stock, p.low_stock_threshold) is level
    ]


def count_low_stock(products: Iterable[Product]) -> int:
    return sum(1 for p in products if is_low(p.stock, p.low_stock_threshold))


def inventory_value(products: Iterable[Product]) -> Money:
    """Catalog value at current prices; negative stock counts as none on hand."""
    return Money.total([p.price * p.stock for p in products if p.stock > 0])


def top_stocked(products: Iterable[Product], limit: int = 3) -> list[Product]:
    return sorted(products, key=lambda p: p.stock, reverse=True)[:limit]
