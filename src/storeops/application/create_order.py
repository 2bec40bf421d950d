"""Application service: Create Order use case.

Orchestrates the flow between repositories and the order composer.
Creating an order does not touch stock; stock only moves through
recorded adjustments.
"""

from __future__ import annotations

from collections.abc import Sequence

from storeops.application.dto import OrderDTO, order_to_dto
from storeops.domain.exceptions import EntityNotFoundError
from storeops.domain.model.product import Product
from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.service.order_composer import ItemRequest, compose_order


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    async def handle(
        self,
        customer_name: str,
        customer_address: str,
        items: Sequence[ItemRequest],
    ) -> OrderDTO:
        """Create a new customer order.

        Steps:
        1. Load each requested product. A missing one is left for the
           composer to report; an unreachable store raises here.
        2. Let the composer validate input and price every line.
        3. Persist (assigns Id and order number) and return a DTO.
        """
        catalog: list[Product] = []
        for product_id in dict.fromkeys(item.product_id for item in items):
            try:
                catalog.append(await self._product_repo.get_by_id(product_id))
            except EntityNotFoundError:
                continue
        order = compose_order(customer_name, customer_address, items, catalog)
        created = await self._order_repo.create(order)
        return order_to_dto(created)
