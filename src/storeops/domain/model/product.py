"""Product aggregate.

Products live independently of orders and stock adjustments. Neither
holds a live reference back to a product: both keep the product id as a
snapshot, so deleting a product never cascades.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.value_objects import Money
from storeops.domain.service.stock_ledger import StockLevel, classify

DEFAULT_LOW_STOCK_THRESHOLD = 10


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` may go negative while a correction is being reconciled;
    nothing in the domain clamps it.
    """

    id: int | None
    name: str
    sku: str
    price: Money
    stock: int = 0
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    image_url: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def create(
        name: str,
        sku: str,
        price: Money,
        stock: int = 0,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        image_url: str | None = None,
    ) -> Product:
        """Build a new, not yet persisted product, enforcing catalog rules."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        if not isinstance(stock, int) or isinstance(stock, bool):
            raise ValidationError("Stock must be an integer")
        validate_threshold(low_stock_threshold)
        return Product(
            id=None,
            name=name.strip(),
            sku=sku.strip(),
            price=price,
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            image_url=(image_url or "").strip() or None,
        )

    @property
    def stock_level(self) -> StockLevel:
        return classify(self.stock, self.low_stock_threshold)


def validate_threshold(threshold: int) -> None:
    if not isinstance(threshold, int) or isinstance(threshold, bool):
        raise ValidationError("Low-stock threshold must be an integer")
    if threshold < 0:
        raise ValidationError("Low-stock threshold cannot be negative")
