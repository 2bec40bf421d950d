"""Domain service: Order Composer.

Turns a cart-like list of ``(product_id, quantity)`` requests and a
catalog snapshot into a new, not yet persisted Order.

Every request must resolve against the catalog. An unknown product
aborts the whole composition rather than being skipped, so an order's
total never leaves out something the customer asked for.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from storeops.domain.exceptions import ProductNotFoundError, ValidationError
from storeops.domain.model.order import Order, OrderLineItem, OrderStatus
from storeops.domain.model.product import Product
from storeops.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class ItemRequest:
    product_id: int
    quantity: int


def compose_order(
    customer_name: str,
    customer_address: str,
    items: Sequence[ItemRequest],
    catalog: Iterable[Product],
) -> Order:
    """Build a pending order priced from *catalog*.

    All input is validated before any line item is built. The returned
    order has no id yet; the order repository assigns it on create.
    """
    name = (customer_name or "").strip()
    address = (customer_address or "").strip()
    if not name:
        raise ValidationError("Customer name is required")
    if not address:
        raise ValidationError("Customer address is required")
    if not items:
        raise ValidationError("Order must contain at least one item")

    by_id = {p.id: p for p in catalog}

    line_items: list[OrderLineItem] = []
    for request in items:
        quantity = Quantity(request.quantity)
        product = by_id.get(request.product_id)
        if product is None:
            raise ProductNotFoundError(request.product_id)
        line_items.append(
            OrderLineItem(
                product_id=product.id,  # type: ignore[arg-type]
                product_name=product.name,
                quantity=quantity,
                unit_price=product.price,  # <-- price snapshot
            )
        )

    return Order(
        id=None,
        customer_name=name,
        customer_address=address,
        items=line_items,
        total_amount=Money.total([item.subtotal for item in line_items]),
        status=OrderStatus.PENDING,
    )
