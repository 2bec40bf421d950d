"""Application service: List Products use case (query)."""

from __future__ import annotations

from storeops.application.dto import ProductDTO, product_to_dto
from storeops.domain.model.product import Product
from storeops.domain.repository.product_repository import ProductRepository


def matches_product(product: Product, search: str) -> bool:
    term = search.strip().lower()
    return not term or term in product.name.lower() or term in product.sku.lower()


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, search: str = "") -> list[ProductDTO]:
        products = await self._product_repo.get_all()
        return [
            product_to_dto(p)
            for p in sorted(products, key=lambda p: p.id or 0)
            if matches_product(p, search)
        ]
