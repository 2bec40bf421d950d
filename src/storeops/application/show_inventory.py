"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storeops.application.list_products import matches_product
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.service.stock_ledger import (
    StockLevel,
    count_low_stock,
    filter_by_level,
    inventory_value,
)


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: int
    product_name: str
    sku: str
    stock: int
    low_stock_threshold: int
    stock_level: str


@dataclass(frozen=True)
class InventoryReportDTO:
    lines: list[InventoryLineDTO]
    low_stock_count: int  # across the whole catalog, not just ``lines``
    total_value: str


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        search: str = "",
        level: str | StockLevel | None = None,
    ) -> InventoryReportDTO:
        products = sorted(await self._product_repo.get_all(), key=lambda p: p.id or 0)

        shown = [p for p in products if matches_product(p, search)]
        if level is not None:
            shown = filter_by_level(shown, StockLevel.parse(level))

        return InventoryReportDTO(
            lines=[
                InventoryLineDTO(
                    product_id=p.id,  # type: ignore[arg-type]
                    product_name=p.name,
                    sku=p.sku,
                    stock=p.stock,
                    low_stock_threshold=p.low_stock_threshold,
                    stock_level=p.stock_level.value,
                )
                for p in shown
            ],
            low_stock_count=count_low_stock(products),
            total_value=str(inventory_value(products)),
        )
