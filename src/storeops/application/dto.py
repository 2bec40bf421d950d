"""Read models returned by the application handlers.

Everything here is already formatted for display: money as "$12.50",
enums as their lowercase value, timestamps in UTC. The CLI prints these
and never touches Product, Order or StockAdjustment directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from storeops.domain.model.order import Order
from storeops.domain.model.product import Product
from storeops.domain.model.stock_adjustment import StockAdjustment
from storeops.domain.service.order_workflow import allowed_next_statuses

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"
UNKNOWN_PRODUCT = "Unknown Product"


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    sku: str
    price: str  # formatted, e.g. "$15.00"
    stock: int
    low_stock_threshold: int
    stock_level: str
    image_url: str | None
    updated_at: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """One priced order line."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """An order with its priced lines and the statuses it may move to."""

    id: int
    order_number: str
    customer_name: str
    customer_address: str
    status: str
    next_statuses: list[str]
    items: list[OrderLineItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class AdjustmentDTO:
    id: int
    product_id: int
    product_name: str
    quantity: int
    reason: str
    timestamp: str
    stock_applied: bool


@dataclass(frozen=True)
class AdjustmentResultDTO:
    adjustment: AdjustmentDTO
    previous_stock: int
    new_stock: int
    stock_level: str
    stock_went_negative: bool


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        sku=product.sku,
        price=str(product.price),
        stock=product.stock,
        low_stock_threshold=product.low_stock_threshold,
        stock_level=product.stock_level.value,
        image_url=product.image_url,
        updated_at=product.updated_at.strftime(TIMESTAMP_FORMAT),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number or "",
        customer_name=order.customer_name,
        customer_address=order.customer_address,
        status=order.status.value,
        next_statuses=[s.value for s in allowed_next_statuses(order.status)],
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
    )


def adjustment_to_dto(adjustment: StockAdjustment, product_name: str) -> AdjustmentDTO:
    return AdjustmentDTO(
        id=adjustment.id,  # type: ignore[arg-type]
        product_id=adjustment.product_id,
        product_name=product_name,
        quantity=adjustment.quantity,
        reason=adjustment.reason.value,
        timestamp=adjustment.timestamp.strftime(TIMESTAMP_FORMAT),
        stock_applied=adjustment.stock_applied,
    )
