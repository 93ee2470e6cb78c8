"""In-memory record store."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from contentsync.contracts.exceptions import ProviderError
from contentsync.contracts.store import RecordStore


@dataclass(frozen=True)
class StoreOperation:
    """Deterministic operation log entry."""

    sequence: int
    name: str
    collection: str
    record_id: str | None
    payload: dict[str, Any]


class InMemoryStore(RecordStore):
    """Store that keeps collections in memory and mirrors the backend's id allocation.

    New records get ``max(existing numeric ids) + 1`` unless the payload
    carries its own ``id``, which then wins; updates merge fields
    over the stored record and keep its id. Used for dry runs (seeded from
    the live backend) and tests.
    """

    def __init__(self, records: Mapping[str, list[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {
            name: copy.deepcopy(list(items)) for name, items in (records or {}).items()
        }
        self._operations: list[StoreOperation] = []

    @property
    def operations(self) -> tuple[StoreOperation, ...]:
        return tuple(self._operations)

    def _record_operation(
        self, name: str, collection: str, record_id: str | None, payload: dict[str, Any] | None = None
    ) -> None:
        self._operations.append(
            StoreOperation(
                sequence=len(self._operations) + 1,
                name=name,
                collection=collection,
                record_id=record_id,
                payload=copy.deepcopy(payload or {}),
            )
        )

    async def __aenter__(self) -> InMemoryStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def list_records(self, collection: str) -> list[dict[str, Any]]:
        self._record_operation("list_records", collection, None)
        return copy.deepcopy(self._collections.get(collection, []))

    async def create_record(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        items = self._collections.setdefault(collection, [])
        record = {"id": self._next_id(items), **copy.deepcopy(fields)}
        self._record_operation("create_record", collection, str(record["id"]), fields)
        items.append(record)
        return copy.deepcopy(record)

    async def update_record(self, collection: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        self._record_operation("update_record", collection, record_id, fields)
        items = self._collections.get(collection, [])
        index = self._index_of(items, record_id)
        if index is None:
            raise ProviderError(f"Record not found: {collection}/{record_id}", status_code=404)
        updated = {**items[index], **copy.deepcopy(fields), "id": items[index]["id"]}
        items[index] = updated
        return copy.deepcopy(updated)

    async def delete_record(self, collection: str, record_id: str) -> None:
        self._record_operation("delete_record", collection, record_id)
        items = self._collections.get(collection, [])
        index = self._index_of(items, record_id)
        if index is None:
            raise ProviderError(f"Record not found: {collection}/{record_id}", status_code=404)
        del items[index]

    @staticmethod
    def _index_of(items: list[dict[str, Any]], record_id: str) -> int | None:
        for index, item in enumerate(items):
            if str(item.get("id")) == str(record_id):
                return index
        return None

    @staticmethod
    def _next_id(items: list[dict[str, Any]]) -> int:
        numeric_ids = [int(item["id"]) for item in items if str(item.get("id", "")).isdigit()]
        return max(numeric_ids, default=0) + 1
