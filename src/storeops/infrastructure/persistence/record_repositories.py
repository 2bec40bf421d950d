"""Domain repositories on top of any RecordBackend.

Each repository maps records to domain objects through
``record_mapping`` and stamps the fields the store owns (ids via the
backend, timestamps and order numbers here).

``get_all`` favours a renderable screen over a correct one: when the
backend is unreachable it logs and returns an empty list. Every other
call lets BackendUnavailableError through, since a lost write is never
acceptable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from storeops.domain.exceptions import BackendUnavailableError, ValidationError
from storeops.domain.model.order import Order, format_order_number
from storeops.domain.model.product import Product
from storeops.domain.model.stock_adjustment import StockAdjustment
from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.stock_adjustment_repository import (
    StockAdjustmentRepository,
)
from storeops.infrastructure.persistence import record_mapping as mapping
from storeops.infrastructure.persistence.record_backend import (
    ORDERS,
    PRODUCTS,
    STOCK_ADJUSTMENTS,
    Record,
    RecordBackend,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _now() -> str:
    return mapping.encode_timestamp(datetime.now(timezone.utc))


class _RecordRepository(Generic[T]):
    collection: str
    fields: dict[str, str]
    from_record: Callable[[Record], T]

    def __init__(self, backend: RecordBackend) -> None:
        self._backend = backend

    async def get_all(self) -> list[T]:
        try:
            records = await self._backend.list_records(self.collection)
        except BackendUnavailableError as exc:
            logger.warning("Listing %s degraded to empty: %s", self.collection, exc)
            return []
        return [self.from_record(r) for r in records]

    async def get_by_id(self, record_id: int) -> T:
        record = await self._backend.get_record(self.collection, record_id)
        return self.from_record(record)

    async def delete(self, record_id: int) -> bool:
        deleted = await self._backend.remove_record(self.collection, record_id)
        logger.info("Deleted %s #%s", self.collection, record_id)
        return deleted

    async def _merge(self, record_id: int, fields: Record) -> T:
        record = await self._backend.merge_record(self.collection, record_id, fields)
        return self.from_record(record)


class RecordProductRepository(_RecordRepository[Product], ProductRepository):
    collection = PRODUCTS
    fields = mapping.PRODUCT_FIELDS
    from_record = staticmethod(mapping.product_from_record)

    async def create(self, product: Product) -> Product:
        record = mapping.product_to_record(product)
        record["createdAt"] = record["updatedAt"] = _now()
        stored = await self._backend.insert_record(self.collection, record)
        created = mapping.product_from_record(stored)
        logger.info("Created product #%s (%s)", created.id, created.sku)
        return created

    async def update(self, product_id: int, changes: dict[str, Any]) -> Product:
        fields = mapping.changes_to_record(changes, self.fields)
        fields["updatedAt"] = _now()
        return await self._merge(product_id, fields)


class RecordOrderRepository(_RecordRepository[Order], OrderRepository):
    collection = ORDERS
    fields = mapping.ORDER_FIELDS
    from_record = staticmethod(mapping.order_from_record)

    async def get_all(self) -> list[Order]:
        orders = await super().get_all()
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    async def create(self, order: Order) -> Order:
        if order.id is not None:
            raise ValidationError(f"Order {order.order_number} is already stored")
        record = mapping.order_to_record(order)
        record.pop("orderNumber", None)
        record["createdAt"] = _now()
        stored = await self._backend.insert_record(self.collection, record)
        if not stored.get("orderNumber"):
            stored = await self._backend.merge_record(
                self.collection,
                stored["Id"],
                {"orderNumber": format_order_number(int(stored["Id"]))},
            )
        created = mapping.order_from_record(stored)
        order.assign_id(created.id)  # type: ignore[arg-type]
        order.created_at = created.created_at
        logger.info(
            "Created order %s for %s, total %s",
            created.order_number, created.customer_name, created.total_amount,
        )
        return created

    async def update(self, order_id: int, changes: dict[str, Any]) -> Order:
        frozen = {"order_number", "total_amount", "items", "created_at"} & changes.keys()
        if frozen:
            raise ValidationError(
                f"Order fields cannot change after creation: {', '.join(sorted(frozen))}"
            )
        return await self._merge(order_id, mapping.changes_to_record(changes, self.fields))


class RecordStockAdjustmentRepository(
    _RecordRepository[StockAdjustment], StockAdjustmentRepository
):
    collection = STOCK_ADJUSTMENTS
    fields = mapping.ADJUSTMENT_FIELDS
    from_record = staticmethod(mapping.adjustment_from_record)

    async def create(self, adjustment: StockAdjustment) -> StockAdjustment:
        record = mapping.adjustment_to_record(adjustment)
        record["timestamp"] = _now()
        stored = await self._backend.insert_record(self.collection, record)
        return mapping.adjustment_from_record(stored)

    async def update(
        self, adjustment_id: int, changes: dict[str, Any]
    ) -> StockAdjustment:
        raise ValidationError(
            f"Stock adjustment #{adjustment_id} cannot be changed; "
            f"record a new adjustment instead"
        )

    async def mark_applied(self, adjustment_id: int) -> StockAdjustment:
        fields = mapping.changes_to_record({"stock_applied": True}, self.fields)
        return await self._merge(adjustment_id, fields)
