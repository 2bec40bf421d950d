"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storeops.application.dto import OrderDTO, order_to_dto
from storeops.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self, order_id: int) -> OrderDTO:
        order = await self._order_repo.get_by_id(order_id)
        return order_to_dto(order)
