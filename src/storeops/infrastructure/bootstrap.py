"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

The record store's lifetime is the application's lifetime: ``open_backend``
starts it, yields the repositories, and stops it on the way out.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from storeops.domain.repository.order_repository import OrderRepository
from storeops.domain.repository.product_repository import ProductRepository
from storeops.domain.repository.stock_adjustment_repository import (
    StockAdjustmentRepository,
)
from storeops.infrastructure.persistence.http_store import HttpRecordBackend, build_client
from storeops.infrastructure.persistence.memory_store import (
    MemoryRecordBackend,
    RecordStore,
)
from storeops.infrastructure.persistence.record_backend import RecordBackend
from storeops.infrastructure.persistence.record_repositories import (
    RecordOrderRepository,
    RecordProductRepository,
    RecordStockAdjustmentRepository,
)
from storeops.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    products: ProductRepository
    orders: OrderRepository
    adjustments: StockAdjustmentRepository


def repositories_for(backend: RecordBackend) -> Repositories:
    return Repositories(
        products=RecordProductRepository(backend),
        orders=RecordOrderRepository(backend),
        adjustments=RecordStockAdjustmentRepository(backend),
    )


@asynccontextmanager
async def open_backend(settings: Settings) -> AsyncIterator[Repositories]:
    if settings.backend == "remote":
        logger.debug("Using remote record store at %s", settings.api_base_url)
        async with build_client(
            settings.api_base_url,
            timeout=settings.request_timeout,
            token=settings.api_token,
        ) as client:
            yield repositories_for(HttpRecordBackend(client))
        return

    logger.debug("Using in-memory record store (data file: %s)", settings.data_file)
    async with RecordStore(snapshot_path=settings.data_file) as store:
        yield repositories_for(MemoryRecordBackend(store))
