"""SDK composition root for contentsync."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from contentsync.auth import create_token_resolver
from contentsync.contracts.config import ContentSyncConfig
from contentsync.contracts.diff import Report
from contentsync.contracts.exceptions import ConfigError, InvalidResolutionError, ProviderCapabilityError
from contentsync.contracts.record import Side
from contentsync.contracts.resolution import Resolution
from contentsync.contracts.store import RecordStore
from contentsync.contracts.sync import SyncResult
from contentsync.engine import ResolutionPolicy, SyncOrchestrator, fetch_collection, suggest_all
from contentsync.engine.progress import SyncProgress
from contentsync.stores import InMemoryStore, create_store

logger = logging.getLogger(__name__)


class ContentSync:
    """contentsync SDK public API.

    Each call opens both stores for its own duration, so one instance can be
    reused across ``analyze`` and ``apply`` calls.
    """

    def __init__(
        self,
        *,
        frontend: RecordStore,
        backend: RecordStore,
        config: ContentSyncConfig,
        policy: ResolutionPolicy | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._frontend = frontend
        self._backend = backend
        self._config = config
        self._policy = policy or ResolutionPolicy()
        self._progress = progress

    @classmethod
    async def from_config(cls, config: ContentSyncConfig, *, progress: SyncProgress | None = None) -> ContentSync:
        token_resolver = create_token_resolver(config)
        try:
            policy = ResolutionPolicy(config.suggestions)
        except InvalidResolutionError as exc:
            raise ConfigError(str(exc)) from exc
        return cls(
            frontend=create_store(config.frontend, token_resolver=token_resolver),
            backend=create_store(config.backend, token_resolver=token_resolver),
            config=config,
            policy=policy,
            progress=progress,
        )

    @property
    def config(self) -> ContentSyncConfig:
        return self._config

    async def analyze(self) -> Report:
        async with self._frontend, self._backend:
            return await self._orchestrator(self._backend).analyze()

    def suggest(self, report: Report) -> dict[str, Resolution]:
        """Pre-filled resolution per difference key, from the configured policy."""
        return suggest_all(report, self._policy)

    async def apply(
        self,
        resolutions: Mapping[str, Resolution | str] | None = None,
        *,
        accept_suggestions: bool = False,
        dry_run: bool = False,
    ) -> SyncResult:
        """Analyze, then apply *resolutions* against a fresh report.

        Explicit resolutions override suggestions for the same key. With
        ``dry_run`` the batch runs against an in-memory copy of the live
        backend collection, which is also what verification re-reads.
        """
        collection = self._config.collection
        async with self._frontend, self._backend:
            target: RecordStore = self._backend
            if dry_run:
                snapshot = await fetch_collection(self._backend, collection, Side.BACKEND)
                target = InMemoryStore({collection: snapshot})
                logger.info("Dry run against a snapshot of %d backend records", len(snapshot))

            orchestrator = self._orchestrator(target, dry_run=dry_run)
            report = await orchestrator.analyze()
            chosen: dict[str, Resolution | str] = {}
            if accept_suggestions:
                chosen.update(suggest_all(report, self._policy))
            chosen.update(resolutions or {})
            batch = await orchestrator.apply_batch(chosen)

        return SyncResult(report=report, resolutions=chosen, batch=batch)

    async def health(self) -> dict[str, Any]:
        """Query the backend's health endpoint."""
        check = getattr(self._backend, "health", None)
        if check is None:
            raise ProviderCapabilityError(
                f"{type(self._backend).__name__} has no health endpoint",
                capability="health",
            )
        async with self._backend:
            return await check()

    def _orchestrator(self, backend: RecordStore, *, dry_run: bool = False) -> SyncOrchestrator:
        return SyncOrchestrator(
            self._frontend,
            backend,
            collection=self._config.collection,
            policy=self._policy,
            progress=self._progress,
            dry_run=dry_run,
        )


__all__ = ["ContentSync"]
