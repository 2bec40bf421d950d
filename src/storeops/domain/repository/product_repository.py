"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (in-memory record store,
remote HTTP store) live in the infrastructure layer.

Every call may suspend. Read-all calls degrade to an empty list when the
store is unreachable; every other call raises BackendUnavailableError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storeops.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def get_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Product:
        """Return a product, or raise EntityNotFoundError."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Store a new product; the returned copy carries its id and timestamps."""

    @abstractmethod
    async def update(self, product_id: int, changes: dict[str, Any]) -> Product:
        """Merge *changes* into a stored product and refresh ``updated_at``."""

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Remove a product, or raise EntityNotFoundError."""
