"""Analyze -> resolve -> apply -> verify cycle."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from contentsync.contracts.diff import Difference, Report
from contentsync.contracts.exceptions import (
    AnalysisError,
    FetchError,
    InvalidResolutionError,
    ProviderError,
    ShapeError,
    SyncError,
)
from contentsync.contracts.record import Side
from contentsync.contracts.resolution import BatchResult, ItemResult, Resolution
from contentsync.contracts.store import RecordStore
from contentsync.engine.differ import diff
from contentsync.engine.planner import DEFAULT_POLICY, MutationKind, ResolutionPolicy, plan_mutation, suggest_all
from contentsync.engine.progress import NullSyncProgress, SyncProgress

logger = logging.getLogger(__name__)


async def fetch_collection(store: RecordStore, collection: str, side: Side) -> list[Any]:
    """List *collection* from *store*, failing whole on transport or shape errors."""
    try:
        raw = await store.list_records(collection)
    except ProviderError as exc:
        raise FetchError(
            f"Failed to fetch {side.value.lower()} collection '{collection}': {exc}",
            side=side.value,
        ) from exc
    if not isinstance(raw, list):
        raise ShapeError(f"{side.value.lower()} collection '{collection}' must be a list, got {type(raw).__name__}")
    return raw


class SyncOrchestrator:
    """Drives one reconciliation cycle between a frontend and a backend store.

    Only the backend store is ever mutated. Callers serialize ``analyze`` and
    ``apply_batch``; there is no internal locking.
    """

    def __init__(
        self,
        frontend: RecordStore,
        backend: RecordStore,
        *,
        collection: str = "team",
        policy: ResolutionPolicy | None = None,
        progress: SyncProgress | None = None,
        dry_run: bool = False,
    ) -> None:
        self._frontend = frontend
        self._backend = backend
        self._collection = collection
        self._policy = policy or DEFAULT_POLICY
        self._progress: SyncProgress = progress or NullSyncProgress()
        self._dry_run = dry_run
        self._report: Report | None = None

    @property
    def report(self) -> Report | None:
        """Latest successful analysis, or ``None`` when it was consumed or never produced."""
        return self._report

    async def analyze(self) -> Report:
        self._report = None

        self._progress.phase_start("Fetch", total=2)
        try:
            frontend_raw = await fetch_collection(self._frontend, self._collection, Side.FRONTEND)
            self._progress.item_done("Fetch")
            backend_raw = await fetch_collection(self._backend, self._collection, Side.BACKEND)
            self._progress.item_done("Fetch")
            self._progress.phase_done("Fetch")
        except BaseException as exc:
            self._progress.phase_error("Fetch", exc)
            raise

        self._progress.phase_start("Diff")
        try:
            report = diff(frontend_raw, backend_raw)
            self._progress.phase_done("Diff")
        except BaseException as exc:
            self._progress.phase_error("Diff", exc)
            raise

        logger.info(
            "Analysis of '%s': %d differences (%s)",
            self._collection,
            report.total_differences,
            ", ".join(f"{kind.value}={count}" for kind, count in report.by_type.items()),
        )
        self._report = report
        return report

    def suggest(self) -> dict[str, Resolution]:
        return suggest_all(self._require_report(), self._policy)

    async def apply_batch(self, resolutions: Mapping[str, Resolution | str]) -> BatchResult:
        report = self._require_report()
        by_key: dict[str, list[Difference]] = {}
        for difference in report.differences:
            by_key.setdefault(difference.key, []).append(difference)

        total = sum(len(by_key.get(key, [])) or 1 for key in resolutions)
        results: list[ItemResult] = []
        self._progress.phase_start("Apply", total=total)
        try:
            for key, resolution in resolutions.items():
                differences = by_key.get(key)
                if not differences:
                    results.append(self._unknown_key_result(key, resolution))
                    self._progress.item_done("Apply")
                    continue
                for difference in differences:
                    results.append(await self._apply_one(difference, resolution))
                    self._progress.item_done("Apply")
            self._progress.phase_done("Apply")
        except BaseException as exc:
            self._progress.phase_error("Apply", exc)
            raise
        finally:
            # The report is stale once anything may have been mutated.
            self._report = None

        succeeded = sum(1 for result in results if result.success)
        batch = BatchResult(
            success=succeeded == len(results),
            results=results,
            message=f"{succeeded}/{len(results)} items synchronized",
            dry_run=self._dry_run,
        )
        logger.info("Batch complete: %s", batch.message)

        if batch.success:
            batch = await self._verify(batch)
        return batch

    async def _verify(self, batch: BatchResult) -> BatchResult:
        self._progress.phase_start("Verify")
        try:
            verification = await self.analyze()
        except AnalysisError as exc:
            self._progress.phase_error("Verify", exc)
            logger.warning("Post-batch verification failed: %s", exc)
            return batch.model_copy(update={"verification_error": str(exc)})
        self._progress.phase_done("Verify")
        return batch.model_copy(update={"verification": verification})

    async def _apply_one(self, difference: Difference, resolution: Resolution | str) -> ItemResult:
        name = difference.label
        try:
            mutation = plan_mutation(difference, resolution)
        except InvalidResolutionError as exc:
            logger.warning("Rejected resolution for %s: %s", name, exc)
            return ItemResult(
                key=difference.key,
                name=name,
                resolution=str(resolution),
                success=False,
                message=f"Invalid resolution: {exc}",
                error=str(exc),
            )

        resolved = Resolution(resolution)
        if mutation.kind == MutationKind.NOOP:
            logger.info("%s: %s", name, mutation.note)
            return ItemResult(
                key=difference.key,
                name=name,
                resolution=resolved.value,
                success=True,
                message=mutation.note,
            )

        try:
            if mutation.kind == MutationKind.CREATE:
                await self._backend.create_record(self._collection, mutation.payload)
                message = f"{name} created in backend"
            else:
                if mutation.record_id is None:
                    raise SyncError(f"Update planned for '{difference.key}' without a backend id")
                await self._backend.update_record(self._collection, mutation.record_id, mutation.payload)
                message = f"{name} updated in backend"
        except Exception as exc:
            # Any store failure belongs to this item only; cancellation still propagates.
            logger.warning(
                "Failed to apply %s for %s: %s",
                resolved.value,
                name,
                exc,
                exc_info=not isinstance(exc, ProviderError),
            )
            return ItemResult(
                key=difference.key,
                name=name,
                resolution=resolved.value,
                success=False,
                message=f"Error: {exc}",
                error=str(exc),
            )

        logger.info("%s", message)
        return ItemResult(key=difference.key, name=name, resolution=resolved.value, success=True, message=message)

    @staticmethod
    def _unknown_key_result(key: str, resolution: Resolution | str) -> ItemResult:
        error = f"No difference for key '{key}' in the current report"
        logger.warning("%s", error)
        return ItemResult(key=key, name=key, resolution=str(resolution), success=False, message=error, error=error)

    def _require_report(self) -> Report:
        if self._report is None:
            raise SyncError("No current analysis; call analyze() before resolving differences")
        return self._report
