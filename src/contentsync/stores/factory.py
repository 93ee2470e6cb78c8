"""Factory for creating record store instances.

Decouples store selection from store implementation: the SDK builds stores
from :class:`StoreSpec` entries without importing concrete classes.
"""

from __future__ import annotations

from collections.abc import Callable

from contentsync.auth.base import TokenResolver
from contentsync.contracts.config import StoreSpec
from contentsync.contracts.exceptions import ConfigError
from contentsync.contracts.store import RecordStore
from contentsync.stores.http import HttpRecordStore
from contentsync.stores.json_file import JsonContentStore
from contentsync.stores.memory import InMemoryStore

StoreBuilder = Callable[[StoreSpec, TokenResolver | None], RecordStore]


def _build_http(spec: StoreSpec, token_resolver: TokenResolver | None) -> RecordStore:
    assert spec.url is not None
    return HttpRecordStore(
        base_url=spec.url,
        token_resolver=token_resolver,
        timeout=spec.timeout,
        max_retries=spec.max_retries,
    )


def _build_json(spec: StoreSpec, token_resolver: TokenResolver | None) -> RecordStore:
    assert spec.path is not None
    return JsonContentStore(spec.path)


def _build_memory(spec: StoreSpec, token_resolver: TokenResolver | None) -> RecordStore:
    return InMemoryStore(spec.records)


# Registry mapping store kinds to their builders
_REGISTRY: dict[str, StoreBuilder] = {
    "http": _build_http,
    "json": _build_json,
    "memory": _build_memory,
}


def register(kind: str, builder: StoreBuilder) -> None:
    """Register a store builder by kind."""
    _REGISTRY[kind] = builder


def create_store(spec: StoreSpec, *, token_resolver: TokenResolver | None = None) -> RecordStore:
    """Create a store instance for *spec*.

    The returned store is an async context manager::

        async with create_store(spec) as store:
            records = await store.list_records("team")

    Raises:
        ConfigError: If the store kind is not registered.
    """
    builder = _REGISTRY.get(spec.kind)
    if builder is None:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ConfigError(f"Unknown store kind: {spec.kind!r}. Available: {available}")
    return builder(spec, token_resolver)
