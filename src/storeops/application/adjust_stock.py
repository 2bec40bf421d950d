"""Application service: Adjust Stock use case.

Thin wrapper over the inventory coordinator that turns its result into
DTOs for the outer surface.
"""

from __future__ import annotations

from storeops.application.dto import (
    AdjustmentResultDTO,
    adjustment_to_dto,
)
from storeops.domain.exceptions import PartialApplyError
from storeops.domain.model.stock_adjustment import AdjustmentReason
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.stock_adjustment_repository import (
    StockAdjustmentRepository,
)
from storeops.domain.service.inventory_coordinator import (
    AdjustmentResult,
    InventoryCoordinator,
)


def _to_dto(result: AdjustmentResult) -> AdjustmentResultDTO:
    return AdjustmentResultDTO(
        adjustment=adjustment_to_dto(result.adjustment, result.product.name),
        previous_stock=result.previous_stock,
        new_stock=result.product.stock,
        stock_level=result.stock_level.value,
        stock_went_negative=result.stock_went_negative,
    )


class AdjustStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        adjustment_repo: StockAdjustmentRepository,
    ) -> None:
        self._coordinator = InventoryCoordinator(product_repo, adjustment_repo)

    async def handle(
        self,
        product_id: int,
        quantity: int,
        reason: str | AdjustmentReason,
    ) -> AdjustmentResultDTO:
        result = await self._coordinator.apply_adjustment(product_id, quantity, reason)
        return _to_dto(result)


class RetryStockWriteHandler:
    """Complete the stock write of an adjustment reported by PartialApplyError.

    Only use this for adjustments whose stock write is known to have
    failed; retrying one that was applied would move stock twice.
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        adjustment_repo: StockAdjustmentRepository,
    ) -> None:
        self._adjustment_repo = adjustment_repo
        self._coordinator = InventoryCoordinator(product_repo, adjustment_repo)

    async def handle(self, adjustment_id: int) -> AdjustmentResultDTO:
        adjustment = await self._adjustment_repo.get_by_id(adjustment_id)
        error = PartialApplyError(
            adjustment_id=adjustment_id,
            product_id=adjustment.product_id,
            delta=adjustment.quantity,
        )
        result = await self._coordinator.retry_stock_write(error)
        return _to_dto(result)
