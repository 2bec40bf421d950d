"""Application service: Delete Product use case.

Orders and stock adjustments keep their product ids as snapshots, so
deleting a product leaves them untouched.
"""

from __future__ import annotations

from storeops.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: int) -> bool:
        return await self._product_repo.delete(product_id)
