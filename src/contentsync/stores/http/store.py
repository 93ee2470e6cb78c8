"""REST backend record store."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from contentsync.auth.base import TokenResolver
from contentsync.contracts.exceptions import AuthenticationError, ProviderError
from contentsync.contracts.store import RecordStore
from contentsync.stores.http._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)


class HttpRecordStore(RecordStore):
    """JSON-over-HTTP adapter for the content backend.

    Routes: ``GET/POST {base}/api/{collection}`` and
    ``PUT/DELETE {base}/api/{collection}/{id}``. Non-2xx responses become
    :class:`ProviderError` carrying the body's ``error`` message when present.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token_resolver: TokenResolver | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        api_prefix: str = "/api",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token_resolver = token_resolver
        self._timeout = timeout
        self._max_retries = max_retries
        self._api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self._client = http_client
        self._owns_client = http_client is None
        self._token: str | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> HttpRecordStore:
        if self._token_resolver is not None:
            self._token = await self._token_resolver.resolve()
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=RetryingTransport(max_retries=self._max_retries),
                timeout=httpx.Timeout(self._timeout),
                headers={"Accept": "application/json"},
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def list_records(self, collection: str) -> list[dict[str, Any]]:
        return await self._request("GET", self._collection_path(collection))

    async def create_record(self, collection: str, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", self._collection_path(collection), json=fields)

    async def update_record(self, collection: str, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", self._record_path(collection, record_id), json=fields)

    async def delete_record(self, collection: str, record_id: str) -> None:
        await self._request("DELETE", self._record_path(collection, record_id))

    async def health(self) -> dict[str, Any]:
        payload = await self._request("GET", f"{self._api_prefix}/health")
        return payload if isinstance(payload, dict) else {"status": payload}

    def _collection_path(self, collection: str) -> str:
        return f"{self._api_prefix}/{quote(collection, safe='')}"

    def _record_path(self, collection: str, record_id: str) -> str:
        return f"{self._collection_path(collection)}/{quote(str(record_id), safe='')}"

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        if self._client is None:
            raise ProviderError("Store is not initialized. Use 'async with'.")

        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        url = f"{self._base_url}{path}"
        _LOG.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError(f"{method} {path} failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"{method} {path} rejected with HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise ProviderError(
                f"{method} {path} failed with HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(f"{method} {path} returned invalid JSON") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase or "unknown error"
    if isinstance(payload, dict):
        for field in ("error", "message", "detail"):
            if payload.get(field):
                return str(payload[field])
    return response.reason_phrase or "unknown error"
