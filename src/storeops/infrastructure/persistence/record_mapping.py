"""Mapping between record-store records and domain objects.

Record stores speak camelCase JSON with an ``Id`` key, e.g.::

    {"Id": 3, "name": "Widget", "lowStockThreshold": 10, "imageUrl": null}

The domain uses snake_case attributes and value objects. This module is
the only place that knows both conventions; repositories call it at the
boundary and nothing else sees raw records.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from storeops.domain.exceptions import ValidationError
from storeops.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    format_order_number,
)
from storeops.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from storeops.domain.model.stock_adjustment import AdjustmentReason, StockAdjustment
from storeops.domain.model.value_objects import Money, Quantity
from storeops.infrastructure.persistence.record_backend import Record

PRODUCT_FIELDS: dict[str, str] = {
    "id": "Id",
    "name": "name",
    "sku": "sku",
    "price": "price",
    "stock": "stock",
    "low_stock_threshold": "lowStockThreshold",
    "image_url": "imageUrl",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}

ORDER_FIELDS: dict[str, str] = {
    "id": "Id",
    "order_number": "orderNumber",
    "customer_name": "customerName",
    "customer_address": "customerAddress",
    "items": "items",
    "total_amount": "totalAmount",
    "status": "status",
    "created_at": "createdAt",
}

LINE_ITEM_FIELDS: dict[str, str] = {
    "product_id": "productId",
    "product_name": "productName",
    "quantity": "quantity",
    "unit_price": "unitPrice",
    "subtotal": "subtotal",
}

ADJUSTMENT_FIELDS: dict[str, str] = {
    "id": "Id",
    "product_id": "productId",
    "quantity": "quantity",
    "reason": "reason",
    "timestamp": "timestamp",
    "stock_applied": "stockApplied",
}


# --- Scalars ------------------------------------------------------------------


def encode_amount(amount: Decimal) -> float:
    """Stores keep amounts as JSON numbers; refuse any a float cannot hold exactly."""
    encoded = float(amount)
    if Decimal(repr(encoded)) != amount:
        raise ValidationError(f"Amount {amount} is too large to store exactly")
    return encoded


def encode_value(value: Any) -> Any:
    if isinstance(value, Money):
        return encode_amount(value.amount)
    if isinstance(value, Decimal):
        return encode_amount(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return encode_timestamp(value)
    if isinstance(value, OrderLineItem):
        return line_item_to_record(value)
    if isinstance(value, list):
        return [encode_value(v) for v in value]
    return value


def encode_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def decode_timestamp(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp in record: {raw!r}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def changes_to_record(changes: dict[str, Any], fields: dict[str, str]) -> Record:
    """Translate a partial update from domain field names to record keys."""
    record: Record = {}
    for name, value in changes.items():
        if name not in fields:
            raise ValidationError(f"Unknown field '{name}'")
        if name == "id":
            raise ValidationError("Id cannot be changed")
        record[fields[name]] = encode_value(value)
    return record


# --- Product ------------------------------------------------------------------


def product_to_record(product: Product) -> Record:
    return {
        record_key: encode_value(getattr(product, attr))
        for attr, record_key in PRODUCT_FIELDS.items()
    }


def product_from_record(record: Record) -> Product:
    threshold = record.get("lowStockThreshold")
    return Product(
        id=int(record["Id"]),
        name=record["name"],
        sku=record.get("sku") or "",
        price=Money.of(record.get("price", 0)),
        stock=int(record.get("stock", 0)),
        low_stock_threshold=(
            DEFAULT_LOW_STOCK_THRESHOLD if threshold is None else int(threshold)
        ),
        image_url=record.get("imageUrl") or None,
        created_at=decode_timestamp(record.get("createdAt")),
        updated_at=decode_timestamp(record.get("updatedAt")),
    )


# --- Order --------------------------------------------------------------------


def line_item_to_record(item: OrderLineItem) -> Record:
    return {
        "productId": item.product_id,
        "productName": item.product_name,
        "quantity": item.quantity.value,
        "unitPrice": encode_value(item.unit_price),
        "subtotal": encode_value(item.subtotal),
    }


def line_item_from_record(record: Record) -> OrderLineItem:
    return OrderLineItem(
        product_id=int(record["productId"]),
        product_name=record.get("productName") or "",
        quantity=Quantity(int(record["quantity"])),
        unit_price=Money.of(record.get("unitPrice", 0)),
    )


def order_to_record(order: Order) -> Record:
    return {
        record_key: encode_value(getattr(order, attr))
        for attr, record_key in ORDER_FIELDS.items()
    }


def order_from_record(record: Record) -> Order:
    order_id = int(record["Id"])
    items = [line_item_from_record(i) for i in record.get("items") or []]
    total = record.get("totalAmount")
    return Order(
        id=order_id,
        order_number=record.get("orderNumber") or format_order_number(order_id),
        customer_name=record.get("customerName") or "",
        customer_address=record.get("customerAddress") or "",
        items=items,
        # Stored total is the historical snapshot; only recompute if absent.
        total_amount=(
            Money.total([i.subtotal for i in items]) if total is None else Money.of(total)
        ),
        status=OrderStatus.parse(record.get("status") or OrderStatus.PENDING),
        created_at=decode_timestamp(record.get("createdAt")),
    )


# --- StockAdjustment ----------------------------------------------------------


def adjustment_to_record(adjustment: StockAdjustment) -> Record:
    return {
        record_key: encode_value(getattr(adjustment, attr))
        for attr, record_key in ADJUSTMENT_FIELDS.items()
    }


def adjustment_from_record(record: Record) -> StockAdjustment:
    return StockAdjustment(
        id=int(record["Id"]),
        product_id=int(record["productId"]),
        quantity=int(record["quantity"]),
        reason=AdjustmentReason.parse(record.get("reason")),
        timestamp=decode_timestamp(record.get("timestamp")),
        # Entries written before the marker existed were always applied.
        stock_applied=bool(record.get("stockApplied", True)),
    )
