"""Application service: Update Product use case.

Covers catalog fields only. Stock is deliberately not editable here:
every stock change goes through a recorded stock adjustment.
"""

from __future__ import annotations

from typing import Any

from storeops.application.dto import ProductDTO, product_to_dto
from storeops.domain.exceptions import ValidationError
from storeops.domain.model.product import validate_threshold
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        product_id: int,
        name: str | None = None,
        sku: str | None = None,
        price: str | None = None,
        low_stock_threshold: int | None = None,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Update catalog fields of a product.

        Price changes do NOT affect existing orders; they captured a
        price snapshot at creation time.
        """
        changes: dict[str, Any] = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            changes["name"] = name.strip()
        if sku is not None:
            if not sku.strip():
                raise ValidationError("Product SKU is required")
            changes["sku"] = sku.strip()
        if price is not None:
            changes["price"] = Money.of(price)
        if low_stock_threshold is not None:
            validate_threshold(low_stock_threshold)
            changes["low_stock_threshold"] = low_stock_threshold
        if image_url is not None:
            changes["image_url"] = image_url.strip() or None

        if not changes:
            raise ValidationError("Nothing to update")

        updated = await self._product_repo.update(product_id, changes)
        return product_to_dto(updated)
