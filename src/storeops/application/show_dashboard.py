"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from storeops.application.dto import OrderDTO, ProductDTO, order_to_dto, product_to_dto
from storeops.domain.model.value_objects import Money
from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.service.stock_ledger import count_low_stock, top_stocked

TOP_PRODUCTS = 3
RECENT_ORDERS = 5


@dataclass(frozen=True)
class DashboardDTO:
    total_revenue: str
    orders_today: int
    low_stock_count: int
    product_count: int
    top_products: list[ProductDTO]
    recent_orders: list[OrderDTO]


class ShowDashboardHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    async def handle(self, today: date | None = None) -> DashboardDTO:
        """Summarise the store. *today* defaults to the current UTC date."""
        today = today or datetime.now(timezone.utc).date()
        products = await self._product_repo.get_all()
        orders = await self._order_repo.get_all()

        recent = sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

        return DashboardDTO(
            total_revenue=str(Money.total([o.total_amount for o in orders])),
            orders_today=sum(
                1 for o in orders
                if o.created_at.astimezone(timezone.utc).date() == today
            ),
            low_stock_count=count_low_stock(products),
            product_count=len(products),
            top_products=[product_to_dto(p) for p in top_stocked(products, TOP_PRODUCTS)],
            recent_orders=[order_to_dto(o) for o in recent[:RECENT_ORDERS]],
        )
