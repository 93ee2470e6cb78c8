"""Read-only store over the site's static content file."""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType
from typing import Any

from contentsync.contracts.exceptions import ProviderCapabilityError, ProviderError
from contentsync.contracts.store import RecordStore


class JsonContentStore(RecordStore):
    """Serves collections from a JSON export of the frontend content module.

    The file is either an object keyed by collection name
    (``{"team": [...], "services": [...]}``) or a bare list, which is served
    for any collection. It is re-read on every listing so each analysis sees
    the current file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def __aenter__(self) -> JsonContentStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def list_records(self, collection: str) -> list[dict[str, Any]]:
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ProviderError(f"failed reading content file: {self._path}") from exc
        except json.JSONDecodeError as exc:
            raise ProviderError(f"invalid JSON in content file: {self._path}") from exc

        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            if collection not in payload:
                raise ProviderError(f"collection '{collection}' not found in content file: {self._path}")
            return payload[collection]
        return payload

    async def create_record(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        raise self._read_only("create")

    async def update_record(self, collection: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        raise self._read_only("update")

    async def delete_record(self, collection: str, record_id: str) -> None:
        raise self._read_only("delete")

    def _read_only(self, operation: str) -> ProviderCapabilityError:
        return ProviderCapabilityError(
            f"content file {self._path} is read-only; cannot {operation} records",
            capability=operation,
        )
