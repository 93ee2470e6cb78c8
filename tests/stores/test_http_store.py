from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from contentsync.auth.resolvers.static import StaticTokenResolver
from contentsync.contracts.exceptions import AuthenticationError, ProviderError
from contentsync.stores.http import HttpRecordStore

Handler = Callable[[httpx.Request], httpx.Response]


def _store(handler: Handler, **kwargs: Any) -> tuple[HttpRecordStore, httpx.AsyncClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    store = HttpRecordStore(base_url="http://backend.test/", http_client=http_client, **kwargs)
    return store, http_client


@pytest.mark.asyncio
async def test_list_records_routes_and_authorizes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1, "name": "Ada"}])

    store, http_client = _store(handler, token_resolver=StaticTokenResolver(token="tok_123"))
    async with store:
        records = await store.list_records("team")

    assert records == [{"id": 1, "name": "Ada"}]
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "http://backend.test/api/team"
    assert seen[0].headers["Authorization"] == "Bearer tok_123"
    await http_client.aclose()


@pytest.mark.asyncio
async def test_anonymous_store_sends_no_authorization_header() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    store, http_client = _store(handler)
    async with store:
        await store.list_records("team")

    assert "Authorization" not in seen[0].headers
    await http_client.aclose()


@pytest.mark.asyncio
async def test_create_posts_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/team"
        body = json.loads(request.read().decode("utf-8"))
        return httpx.Response(201, json={"id": 5, **body})

    store, http_client = _store(handler)
    async with store:
        created = await store.create_record("team", {"name": "Ada", "specialties": ["tax"]})

    assert created == {"id": 5, "name": "Ada", "specialties": ["tax"]}
    await http_client.aclose()


@pytest.mark.asyncio
async def test_update_puts_to_record_path() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        assert request.url.raw_path == b"/api/team/a%20b"
        return httpx.Response(200, json={"id": "a b", "title": "CTO"})

    store, http_client = _store(handler)
    async with store:
        updated = await store.update_record("team", "a b", {"title": "CTO"})

    assert updated["title"] == "CTO"
    await http_client.aclose()


@pytest.mark.asyncio
async def test_delete_accepts_empty_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/api/team/3"
        return httpx.Response(204)

    store, http_client = _store(handler)
    async with store:
        assert await store.delete_record("team", "3") is None
    await http_client.aclose()


@pytest.mark.asyncio
async def test_non_2xx_maps_to_provider_error_with_body_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "Name is required"})

    store, http_client = _store(handler)
    async with store:
        with pytest.raises(ProviderError, match="Name is required") as exc_info:
            await store.create_record("team", {})

    assert exc_info.value.status_code == 400
    assert not isinstance(exc_info.value, AuthenticationError)
    await http_client.aclose()


@pytest.mark.asyncio
async def test_non_json_error_body_falls_back_to_reason_phrase() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="<html>oops</html>")

    store, http_client = _store(handler)
    async with store:
        with pytest.raises(ProviderError, match="Internal Server Error"):
            await store.list_records("team")
    await http_client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_auth_failures_map_to_authentication_error(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"message": "Invalid token"})

    store, http_client = _store(handler)
    async with store:
        with pytest.raises(AuthenticationError, match="Invalid token") as exc_info:
            await store.list_records("team")

    assert exc_info.value.status_code == status_code
    await http_client.aclose()


@pytest.mark.asyncio
async def test_transport_errors_map_to_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store, http_client = _store(handler)
    async with store:
        with pytest.raises(ProviderError, match="connection refused"):
            await store.list_records("team")
    await http_client.aclose()


@pytest.mark.asyncio
async def test_invalid_json_response_is_a_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    store, http_client = _store(handler)
    async with store:
        with pytest.raises(ProviderError, match="invalid JSON"):
            await store.list_records("team")
    await http_client.aclose()


@pytest.mark.asyncio
async def test_health_hits_health_endpoint() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/health"
        return httpx.Response(200, json={"status": "OK", "database": "connected"})

    store, http_client = _store(handler)
    async with store:
        assert await store.health() == {"status": "OK", "database": "connected"}
    await http_client.aclose()


@pytest.mark.asyncio
async def test_custom_api_prefix() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v2/team"
        return httpx.Response(200, json=[])

    store, http_client = _store(handler, api_prefix="v2")
    async with store:
        await store.list_records("team")
    await http_client.aclose()


@pytest.mark.asyncio
async def test_use_without_context_manager_is_rejected() -> None:
    store = HttpRecordStore(base_url="http://backend.test")

    with pytest.raises(ProviderError, match="not initialized"):
        await store.list_records("team")


@pytest.mark.asyncio
async def test_injected_client_is_not_closed() -> None:
    store, http_client = _store(lambda request: httpx.Response(200, json=[]))

    async with store:
        pass

    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_owned_client_is_created_and_closed() -> None:
    store = HttpRecordStore(base_url="http://backend.test", max_retries=0)

    async with store:
        assert store._client is not None

    assert store._client is None
