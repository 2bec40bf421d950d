"""Application service: Update Order Status use case.

Statuses only move forward (see ``order_workflow``). ``force=True``
bypasses the check for callers that still need the old "pick any
status" behaviour.
"""

from __future__ import annotations

import logging

from storeops.application.dto import OrderDTO, order_to_dto
from storeops.domain.model.order import OrderStatus
from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.service.order_workflow import force_status, set_status

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(
        self,
        order_id: int,
        status: str | OrderStatus,
        force: bool = False,
    ) -> OrderDTO:
        new_status = OrderStatus.parse(status)
        order = await self._order_repo.get_by_id(order_id)
        previous = order.status

        if force:
            force_status(order, new_status)
        else:
            set_status(order, new_status)

        if order.status is previous:
            return order_to_dto(order)

        updated = await self._order_repo.update(order_id, {"status": order.status})
        logger.info(
            "Order %s status %s -> %s",
            updated.order_number, previous.value, updated.status.value,
        )
        return order_to_dto(updated)
