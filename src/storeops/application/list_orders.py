"""Application service: List Orders use case (query).

Orders come back newest first; *search* matches the order number or the
customer name, case-insensitively.
"""

from __future__ import annotations

from storeops.application.dto import OrderDTO, order_to_dto
from storeops.domain.model.order import Order
from storeops.domain.repository.order_repository import OrderRepository


def matches_order(order: Order, search: str) -> bool:
    term = search.strip().lower()
    return (
        not term
        or term in (order.order_number or "").lower()
        or term in order.customer_name.lower()
    )


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self, search: str = "") -> list[OrderDTO]:
        orders = await self._order_repo.get_all()
        return [order_to_dto(o) for o in orders if matches_order(o, search)]
