"""Remote record store over HTTP.

Talks to a REST-style record API::

    GET    {base_url}/{collection}          -> [record, ...]
    GET    {base_url}/{collection}/{id}     -> record
    POST   {base_url}/{collection}          -> record (with assigned Id)
    PATCH  {base_url}/{collection}/{id}     -> record
    DELETE {base_url}/{collection}/{id}

Transport failures, timeouts and 5xx answers become
BackendUnavailableError; 404 becomes EntityNotFoundError. Timeouts are
configured on the client, not here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storeops.domain.exceptions import (
    BackendUnavailableError,
    EntityNotFoundError,
    ValidationError,
)
from storeops.infrastructure.persistence.record_backend import (
    COLLECTION_LABELS,
    Record,
    RecordBackend,
)

logger = logging.getLogger(__name__)


def build_client(
    base_url: str,
    timeout: float = 10.0,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers=headers,
        transport=transport,
    )


class HttpRecordBackend(RecordBackend):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def list_records(self, collection: str) -> list[Record]:
        payload = await self._request("GET", f"/{collection}", collection)
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        if not isinstance(payload, list):
            raise BackendUnavailableError(
                f"Unexpected response listing {collection}: {type(payload).__name__}"
            )
        return payload

    async def get_record(self, collection: str, record_id: int) -> Record:
        return await self._request(
            "GET", f"/{collection}/{record_id}", collection, record_id
        )

    async def insert_record(self, collection: str, record: Record) -> Record:
        body = {k: v for k, v in record.items() if k != "Id"}
        return await self._request("POST", f"/{collection}", collection, json=body)

    async def merge_record(
        self, collection: str, record_id: int, fields: Record
    ) -> Record:
        return await self._request(
            "PATCH", f"/{collection}/{record_id}", collection, record_id, json=fields
        )

    async def remove_record(self, collection: str, record_id: int) -> bool:
        await self._request(
            "DELETE", f"/{collection}/{record_id}", collection, record_id
        )
        return True

    # --- HTTP helpers ---------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        collection: str,
        record_id: int | None = None,
        json: Any = None,
    ) -> Any:
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise BackendUnavailableError(
                f"Record store unreachable ({method} {url}): {exc}"
            ) from exc

        if resp.status_code == 404 and record_id is not None:
            raise EntityNotFoundError(
                f"{COLLECTION_LABELS.get(collection, collection)} "
                f"with Id {record_id} not found"
            )
        if resp.status_code >= 500 or resp.status_code == 404:
            raise BackendUnavailableError(
                f"Record store error {resp.status_code} on {method} {url}"
            )
        if resp.status_code >= 400:
            raise ValidationError(
                f"Record store rejected {method} {url} "
                f"({resp.status_code}): {resp.text[:200]}"
            )

        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendUnavailableError(
                f"Invalid JSON from record store on {method} {url}"
            ) from exc
