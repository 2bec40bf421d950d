"""Raw record CRUD contract shared by every storage backend.

Backends deal only in camelCase record dicts grouped into named
collections (``products``, ``orders``, ``stockAdjustments``). They know
nothing about the domain; the record repositories map records to domain
objects on top of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]

PRODUCTS = "products"
ORDERS = "orders"
STOCK_ADJUSTMENTS = "stockAdjustments"

COLLECTIONS = (PRODUCTS, ORDERS, STOCK_ADJUSTMENTS)

COLLECTION_LABELS = {
    PRODUCTS: "Product",
    ORDERS: "Order",
    STOCK_ADJUSTMENTS: "Stock adjustment",
}


class RecordBackend(ABC):

    @abstractmethod
    async def list_records(self, collection: str) -> list[Record]:
        """Return every record in *collection*."""

    @abstractmethod
    async def get_record(self, collection: str, record_id: int) -> Record:
        """Return one record, or raise EntityNotFoundError."""

    @abstractmethod
    async def insert_record(self, collection: str, record: Record) -> Record:
        """Store a new record and return it with its assigned ``Id``."""

    @abstractmethod
    async def merge_record(
        self, collection: str, record_id: int, fields: Record
    ) -> Record:
        """Shallow-merge *fields* into a stored record and return the result."""

    @abstractmethod
    async def remove_record(self, collection: str, record_id: int) -> bool:
        """Delete a record, or raise EntityNotFoundError."""
