"""Application service: Add Product use case."""

from __future__ import annotations

from storeops.application.dto import ProductDTO, product_to_dto
from storeops.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        name: str,
        sku: str,
        price: str,
        stock: int = 0,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog.

        SKUs are expected to be unique but this is not enforced here.
        """
        product = Product.create(
            name=name,
            sku=sku,
            price=Money.of(price),
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            image_url=image_url,
        )
        created = await self._product_repo.create(product)
        return product_to_dto(created)
