"""Application service: Recent Adjustments use case (query).

Adjustments keep only a product id, so names are looked up from the
current catalog. Ids with no matching product show as "Unknown Product".
"""

from __future__ import annotations

from storeops.application.dto import UNKNOWN_PRODUCT, AdjustmentDTO, adjustment_to_dto
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.stock_adjustment_repository import (
    StockAdjustmentRepository,
)
from storeops.domain.service.inventory_coordinator import InventoryCoordinator


class RecentAdjustmentsHandler:

    def __init__(
        self,
        adjustment_repo: StockAdjustmentRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._adjustment_repo = adjustment_repo
        self._product_repo = product_repo

    async def handle(
        self,
        limit: int | None = 5,
        product_id: int | None = None,
    ) -> list[AdjustmentDTO]:
        if product_id is not None:
            coordinator = InventoryCoordinator(self._product_repo, self._adjustment_repo)
            adjustments = await coordinator.adjustment_history(product_id)
        else:
            adjustments = sorted(
                await self._adjustment_repo.get_all(),
                key=lambda a: (a.timestamp, a.id or 0),
                reverse=True,
            )
        if limit is not None:
            adjustments = adjustments[:limit]

        names = {p.id: p.name for p in await self._product_repo.get_all()}
        return [
            adjustment_to_dto(a, names.get(a.product_id, UNKNOWN_PRODUCT))
            for a in adjustments
        ]
