"""Resolution legality, heuristic suggestions, and mutation planning."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from contentsync.contracts.diff import Difference, DifferenceKind, Report
from contentsync.contracts.exceptions import InvalidResolutionError, SyncError
from contentsync.contracts.record import Record
from contentsync.contracts.resolution import LEGAL_RESOLUTIONS, Resolution


class MutationKind(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    NOOP = "NOOP"


@dataclass(frozen=True)
class PlannedMutation:
    """The single backend call implied by one resolved difference."""

    kind: MutationKind
    record_id: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    note: str = ""


class ResolutionPolicy:
    """Per-kind suggestion map used to pre-fill operator choices.

    The defaults favor locally-authored content: create what the backend
    lacks, keep what only the backend has, and push the frontend version on
    mismatch. Frontend-wins is a product policy; override it per kind.
    """

    DEFAULTS: Mapping[DifferenceKind, Resolution] = MappingProxyType(
        {
            DifferenceKind.MISSING_IN_BACKEND: Resolution.CREATE_IN_BACKEND,
            DifferenceKind.MISSING_IN_FRONTEND: Resolution.USE_BACKEND,
            DifferenceKind.MISMATCH: Resolution.USE_FRONTEND,
        }
    )

    def __init__(self, overrides: Mapping[DifferenceKind, Resolution] | None = None) -> None:
        suggestions = dict(self.DEFAULTS)
        for kind, resolution in (overrides or {}).items():
            kind = DifferenceKind(kind)
            resolution = Resolution(resolution)
            if not is_legal(kind, resolution):
                raise InvalidResolutionError(
                    f"{resolution.value} is not a legal suggestion for {kind.value}",
                    kind=kind.value,
                    resolution=resolution.value,
                )
            suggestions[kind] = resolution
        self._suggestions = suggestions

    def suggestion_for(self, kind: DifferenceKind) -> Resolution | None:
        return self._suggestions.get(kind)


DEFAULT_POLICY = ResolutionPolicy()


def is_legal(kind: DifferenceKind, resolution: Resolution) -> bool:
    return resolution in LEGAL_RESOLUTIONS.get(kind, frozenset())


def validate_resolution(difference: Difference, resolution: Resolution | str) -> Resolution:
    """Return the resolution as an enum member, or raise if it is unknown or illegal."""
    try:
        parsed = Resolution(resolution)
    except ValueError as exc:
        raise InvalidResolutionError(
            f"Unknown resolution {resolution!r} for '{difference.label}'",
            kind=difference.kind.value,
            resolution=str(resolution),
        ) from exc
    if not is_legal(difference.kind, parsed):
        allowed = ", ".join(sorted(r.value for r in LEGAL_RESOLUTIONS[difference.kind]))
        raise InvalidResolutionError(
            f"{parsed.value} is not legal for {difference.kind.value} on '{difference.label}' (allowed: {allowed})",
            kind=difference.kind.value,
            resolution=parsed.value,
        )
    return parsed


def suggest(difference: Difference, policy: ResolutionPolicy = DEFAULT_POLICY) -> Resolution | None:
    """Advisory resolution for *difference*; ``None`` only for an unrecognized kind."""
    try:
        kind = DifferenceKind(difference.kind)
    except ValueError:
        return None
    return policy.suggestion_for(kind)


def suggest_all(report: Report, policy: ResolutionPolicy = DEFAULT_POLICY) -> dict[str, Resolution]:
    suggestions: dict[str, Resolution] = {}
    for difference in report.differences:
        suggestion = suggest(difference, policy)
        if suggestion is not None:
            suggestions.setdefault(difference.key, suggestion)
    return suggestions


def plan_mutation(difference: Difference, resolution: Resolution | str) -> PlannedMutation:
    resolved = validate_resolution(difference, resolution)

    if resolved == Resolution.CREATE_IN_BACKEND:
        return PlannedMutation(
            kind=MutationKind.CREATE,
            payload=_side_record(difference.frontend_record, difference, "frontend").to_payload(include_id=True),
        )

    if resolved == Resolution.USE_FRONTEND:
        frontend = _side_record(difference.frontend_record, difference, "frontend")
        record_id = _side_record(difference.backend_record, difference, "backend").id
        if record_id is None:
            raise InvalidResolutionError(
                f"Cannot update '{difference.label}': backend record has no id",
                kind=difference.kind.value,
                resolution=resolved.value,
            )
        return PlannedMutation(
            kind=MutationKind.UPDATE,
            record_id=record_id,
            payload=frontend.to_payload(),
        )

    if resolved == Resolution.DELETE_IN_FRONTEND:
        return PlannedMutation(kind=MutationKind.NOOP, note="Frontend-only record disregarded")
    return PlannedMutation(kind=MutationKind.NOOP, note="Backend version kept")


def _side_record(record: Record | None, difference: Difference, side: str) -> Record:
    if record is None:
        raise SyncError(f"{difference.kind.value} difference '{difference.key}' carries no {side} record")
    return record
