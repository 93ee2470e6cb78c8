"""Record store adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any


class RecordStore(ABC):
    """Narrow create/read/update/delete capability over named record collections.

    Raw records are JSON-shaped mappings; canonicalization happens in the
    engine, never in the store.
    """

    @abstractmethod
    async def __aenter__(self) -> RecordStore: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def list_records(self, collection: str) -> list[dict[str, Any]]: ...  # pragma: no cover

    @abstractmethod
    async def create_record(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]: ...  # pragma: no cover

    @abstractmethod
    async def update_record(
        self, collection: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]: ...  # pragma: no cover

    @abstractmethod
    async def delete_record(self, collection: str, record_id: str) -> None: ...  # pragma: no cover
