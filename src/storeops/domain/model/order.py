"""Order aggregate.

An Order owns its line items. Line items and the order total are a
snapshot of the catalog at creation time: later price or name changes on
a product never reach an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.value_objects import Money, Quantity

ORDER_NUMBER_PREFIX = "ORD-"


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"

    @classmethod
    def parse(cls, value: str | OrderStatus) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Unknown order status '{value}' (expected one of: {allowed})"
            ) from None


def format_order_number(order_id: int) -> str:
    """``ORD-`` plus the id padded to four digits; longer ids are kept whole."""
    return f"{ORDER_NUMBER_PREFIX}{order_id:04d}"


@dataclass(frozen=True)
class OrderLineItem:
    """One product/quantity entry, priced when the order was composed."""

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    New orders come from the order composer. The plain ``__init__`` lets
    repositories reconstitute stored orders without re-validating them.
    """

    id: int | None
    customer_name: str
    customer_address: str
    items: list[OrderLineItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    order_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def assign_id(self, order_id: int) -> None:
        """Give a freshly stored order its id and display number.

        Both are fixed for the life of the order.
        """
        if self.id is not None:
            raise ValidationError(f"Order already has Id {self.id}")
        self.id = order_id
        self.order_number = format_order_number(order_id)

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
