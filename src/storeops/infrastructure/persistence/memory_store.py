"""In-memory record store, optionally snapshotted to a JSON file.

The store is an explicit object: the composition root creates it, opens
it on start-up and closes it on shutdown, and hands it to the backend
that repositories use. While closed, every operation raises
BackendUnavailableError.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

from storeops.domain.exceptions import BackendUnavailableError, EntityNotFoundError
from storeops.infrastructure.persistence.record_backend import (
    COLLECTION_LABELS,
    COLLECTIONS,
    Record,
    RecordBackend,
)

logger = logging.getLogger(__name__)


class RecordStore:
    """Holds all collections for the lifetime of one application run."""

    def __init__(
        self,
        snapshot_path: Path | None = None,
        seed: dict[str, list[Record]] | None = None,
    ) -> None:
        self._snapshot_path = snapshot_path
        self._seed = seed or {}
        self._collections: dict[str, list[Record]] | None = None

    # --- Lifecycle ------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._collections is not None

    async def open(self) -> RecordStore:
        if self.is_open:
            return self
        data = self._load_snapshot()
        self._collections = {
            name: copy.deepcopy(data[name] if name in data else self._seed.get(name, []))
            for name in COLLECTIONS
        }
        logger.debug(
            "Record store opened (%s)",
            ", ".join(f"{n}={len(r)}" for n, r in self._collections.items()),
        )
        return self

    async def close(self) -> None:
        if not self.is_open:
            return
        self._persist_snapshot()
        self._collections = None
        logger.debug("Record store closed")

    async def __aenter__(self) -> RecordStore:
        return await self.open()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- Collection access ----------------------------------------------------

    def collection(self, name: str) -> list[Record]:
        if self._collections is None:
            raise BackendUnavailableError("Record store is not open")
        try:
            return self._collections[name]
        except KeyError:
            raise BackendUnavailableError(f"Unknown collection '{name}'") from None

    def next_id(self, name: str) -> int:
        return max((int(r["Id"]) for r in self.collection(name)), default=0) + 1

    # --- Snapshot helpers -----------------------------------------------------

    def _load_snapshot(self) -> dict[str, list[Record]]:
        if self._snapshot_path is None or not self._snapshot_path.exists():
            return {}
        try:
            return json.loads(self._snapshot_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise BackendUnavailableError(
                f"Cannot read data file {self._snapshot_path}: {exc}"
            ) from exc

    def _persist_snapshot(self) -> None:
        if self._snapshot_path is None:
            return
        path = self._snapshot_path
        staging = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_text(
                json.dumps(self._collections, indent=2) + "\n", encoding="utf-8"
            )
            staging.replace(path)
        except OSError as exc:
            staging.unlink(missing_ok=True)
            raise BackendUnavailableError(
                f"Cannot write data file {path}: {exc}"
            ) from exc


class MemoryRecordBackend(RecordBackend):
    """RecordBackend over a RecordStore.

    Records are deep-copied on the way in and out so callers can never
    mutate stored state behind the store's back.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def list_records(self, collection: str) -> list[Record]:
        return copy.deepcopy(self._store.collection(collection))

    async def get_record(self, collection: str, record_id: int) -> Record:
        return copy.deepcopy(self._find(collection, record_id))

    async def insert_record(self, collection: str, record: Record) -> Record:
        stored = copy.deepcopy(record)
        stored["Id"] = self._store.next_id(collection)
        self._store.collection(collection).append(stored)
        return copy.deepcopy(stored)

    async def merge_record(
        self, collection: str, record_id: int, fields: Record
    ) -> Record:
        stored = self._find(collection, record_id)
        stored.update(copy.deepcopy(fields))
        return copy.deepcopy(stored)

    async def remove_record(self, collection: str, record_id: int) -> bool:
        records = self._store.collection(collection)
        records.remove(self._find(collection, record_id))
        return True

    def _find(self, collection: str, record_id: int) -> Record:
        for record in self._store.collection(collection):
            if record["Id"] == record_id:
                return record
        raise EntityNotFoundError(
            f"{COLLECTION_LABELS.get(collection, collection)} with Id {record_id} not found"
        )
