"""HTTP record backend against an ``httpx.MockTransport``."""

import json

import httpx
import pytest

from storeops.domain.exceptions import (
    BackendUnavailableError,
    EntityNotFoundError,
    ValidationError,
)
from storeops.infrastructure.persistence.http_store import HttpRecordBackend, build_client
from storeops.infrastructure.persistence.record_backend import PRODUCTS
from storeops.infrastructure.persistence.record_repositories import RecordProductRepository
from tests.fakes import run

WIDGET = {"Id": 1, "name": "Widget", "sku": "W-1", "price": 9.99, "stock": 5}


def _call(handler, fn, token=None):
    """Run ``fn(backend)`` against a client whose requests go to *handler*."""

    async def _main():
        client = build_client(
            "http://records.test/api", token=token, transport=httpx.MockTransport(handler)
        )
        async with client:
            return await fn(HttpRecordBackend(client))

    return run(_main())


class TestReads:

    def test_list_plain_and_wrapped(self):
        assert _call(lambda r: httpx.Response(200, json=[WIDGET]),
                     lambda b: b.list_records(PRODUCTS)) == [WIDGET]
        assert _call(lambda r: httpx.Response(200, json={"data": [WIDGET]}),
                     lambda b: b.list_records(PRODUCTS)) == [WIDGET]

    def test_get_hits_record_url(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(200, json=WIDGET)

        assert _call(handler, lambda b: b.get_record(PRODUCTS, 1)) == WIDGET
        assert seen == [("GET", "/api/products/1")]

    def test_bearer_token(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=[])

        _call(handler, lambda b: b.list_records(PRODUCTS), token="s3cret")
        assert seen["authorization"] == "Bearer s3cret"


class TestWrites:

    def test_insert_drops_id(self):
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(201, json={**bodies[-1], "Id": 12})

        stored = _call(handler, lambda b: b.insert_record(PRODUCTS, {"Id": None, "name": "X"}))
        assert bodies == [{"name": "X"}]
        assert stored["Id"] == 12

    def test_merge_uses_patch(self):
        seen = []

        def handler(request):
            seen.append(request.method)
            return httpx.Response(200, json={**WIDGET, "stock": 2})

        assert _call(handler, lambda b: b.merge_record(PRODUCTS, 1, {"stock": 2}))["stock"] == 2
        assert seen == ["PATCH"]

    def test_delete_with_empty_body(self):
        assert _call(lambda r: httpx.Response(204), lambda b: b.remove_record(PRODUCTS, 1)) is True


class TestErrorMapping:

    def test_404_on_record(self):
        with pytest.raises(EntityNotFoundError, match="Product with Id 4 not found"):
            _call(lambda r: httpx.Response(404), lambda b: b.get_record(PRODUCTS, 4))

    def test_404_on_collection(self):
        with pytest.raises(BackendUnavailableError):
            _call(lambda r: httpx.Response(404), lambda b: b.list_records(PRODUCTS))

    def test_5xx(self):
        with pytest.raises(BackendUnavailableError, match="503"):
            _call(lambda r: httpx.Response(503), lambda b: b.get_record(PRODUCTS, 1))

    def test_4xx(self):
        with pytest.raises(ValidationError, match="422"):
            _call(lambda r: httpx.Response(422, text="bad price"),
                  lambda b: b.insert_record(PRODUCTS, {"name": "X"}))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BackendUnavailableError, match="unreachable"):
            _call(handler, lambda b: b.get_record(PRODUCTS, 1))

    def test_unexpected_list_payload(self):
        with pytest.raises(BackendUnavailableError, match="Unexpected response"):
            _call(lambda r: httpx.Response(200, json={"rows": []}),
                  lambda b: b.list_records(PRODUCTS))

    def test_repository_listing_degrades(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        products = _call(handler, lambda b: RecordProductRepository(b).get_all())
        assert products == []
