"""Domain service: Inventory Coordinator.

Applies a stock adjustment across two aggregates as one logical unit:
the StockAdjustment ledger entry and the Product's stock count.

Every check runs before the first write, so bad input leaves the store
untouched. Once writing starts, the ledger entry always goes
first, so a failed stock write still leaves an audit record behind.
That orphaned entry stays marked as not applied, is reported through
PartialApplyError, and can be completed once with ``retry_stock_write``
without recording it twice. Retrying an applied entry is refused.

There is no locking here. Two concurrent adjustments to the same product
can interleave their read-modify-write of ``stock`` and lose an update;
callers needing strict counts must serialize adjustments per product.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storeops.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    PartialApplyError,
    ProductNotFoundError,
    ValidationError,
)
from storeops.domain.model.product import Product
from storeops.domain.model.stock_adjustment import (
    AdjustmentReason,
    StockAdjustment,
    validate_adjustment_quantity,
)
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.stock_adjustment_repository import (
    StockAdjustmentRepository,
)
from storeops.domain.service.stock_ledger import StockLevel, apply_delta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdjustmentResult:
    adjustment: StockAdjustment
    product: Product
    previous_stock: int

    @property
    def stock_went_negative(self) -> bool:
        return self.product.stock < 0

    @property
    def stock_level(self) -> StockLevel:
        return self.product.stock_level


class InventoryCoordinator:

    def __init__(
        self,
        product_repo: ProductRepository,
        adjustment_repo: StockAdjustmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._adjustment_repo = adjustment_repo

    async def apply_adjustment(
        self,
        product_id: int,
        quantity: int,
        reason: str | AdjustmentReason,
    ) -> AdjustmentResult:
        """Record an adjustment and move the product's stock by *quantity*.

        Phase 1 validates quantity, reason and the product reference;
        nothing is written if any of them is wrong. Phase 2 writes the
        adjustment record, then the product stock.
        """
        # Phase 1: validate
        validate_adjustment_quantity(quantity)
        parsed_reason = AdjustmentReason.parse(reason)
        product = await self._load_product(product_id)

        # Phase 2: ledger entry first, then the stock count
        adjustment = await self._adjustment_repo.create(
            StockAdjustment(
                id=None,
                product_id=product_id,
                quantity=quantity,
                reason=parsed_reason,
            )
        )
        logger.info(
            "Recorded adjustment #%s: product %s %+d (%s)",
            adjustment.id, product_id, quantity, parsed_reason.value,
        )
        return await self._write_stock(adjustment, product)

    async def retry_stock_write(self, error: PartialApplyError) -> AdjustmentResult:
        """Finish an adjustment whose stock write failed.

        Only the product update is repeated; the existing ledger entry is
        reused. The delta is applied to the product's *current* stock, and
        only while the entry is still marked as not applied.
        """
        adjustment = await self._adjustment_repo.get_by_id(error.adjustment_id)
        if adjustment.product_id != error.product_id or adjustment.quantity != error.delta:
            raise ValidationError(
                f"Adjustment #{error.adjustment_id} does not match the failed "
                f"stock write (product {error.product_id}, {error.delta:+d})"
            )
        if adjustment.stock_applied:
            raise ValidationError(
                f"Adjustment #{adjustment.id} was already applied to product "
                f"{adjustment.product_id}; nothing to retry"
            )
        product = await self._load_product(adjustment.product_id)
        return await self._write_stock(adjustment, product)

    async def adjustment_history(self, product_id: int) -> list[StockAdjustment]:
        """All adjustments recorded for one product, newest first."""
        adjustments = await self._adjustment_repo.get_all()
        return sorted(
            (a for a in adjustments if a.product_id == product_id),
            key=lambda a: (a.timestamp, a.id or 0),
            reverse=True,
        )

    # --- Internal helpers -----------------------------------------------------

    async def _load_product(self, product_id: int) -> Product:
        try:
            return await self._product_repo.get_by_id(product_id)
        except EntityNotFoundError:
            raise ProductNotFoundError(product_id) from None

    async def _write_stock(
        self, adjustment: StockAdjustment, product: Product
    ) -> AdjustmentResult:
        new_stock = apply_delta(product.stock, adjustment.quantity)
        try:
            updated = await self._product_repo.update(
                adjustment.product_id, {"stock": new_stock}
            )
        except Exception as exc:
            logger.error(
                "Adjustment #%s recorded but product %s stock write failed: %s",
                adjustment.id, adjustment.product_id, exc,
            )
            raise PartialApplyError(
                adjustment_id=adjustment.id,  # type: ignore[arg-type]
                product_id=adjustment.product_id,
                delta=adjustment.quantity,
                cause=exc,
            ) from exc

        try:
            adjustment = await self._adjustment_repo.mark_applied(adjustment.id)  # type: ignore[arg-type]
        except DomainException as exc:
            # Stock has already moved; only the marker is missing.
            logger.error(
                "Adjustment #%s moved product %s stock but is still marked "
                "pending: %s",
                adjustment.id, adjustment.product_id, exc,
            )

        return AdjustmentResult(
            adjustment=adjustment,
            product=updated,
            previous_stock=product.stock,
        )
