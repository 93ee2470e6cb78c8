"""Symmetric-difference classification between the two collections."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from contentsync.contracts.diff import Difference, DifferenceKind, FieldDiff, Report
from contentsync.contracts.record import ARRAY_FIELDS, COMPARABLE_FIELDS, Record, Side
from contentsync.engine.normalizer import name_key, normalize_collection

logger = logging.getLogger(__name__)


def compare_records(frontend: Record, backend: Record) -> tuple[FieldDiff, ...]:
    """Every comparable field whose canonical values differ, in canonical field order."""
    frontend_values = frontend.comparable()
    backend_values = backend.comparable()
    diffs: list[FieldDiff] = []
    for field in COMPARABLE_FIELDS:
        # A field the frontend leaves unset is owned by the backend.
        if frontend_values[field] is None or frontend_values[field] == backend_values[field]:
            continue
        diffs.append(
            FieldDiff(
                field=field,
                frontend_value=_display_value(frontend, field),
                backend_value=_display_value(backend, field),
            )
        )
    return tuple(diffs)


def diff(frontend: Iterable[Any], backend: Iterable[Any]) -> Report:
    """Classify every record of both collections.

    Inputs may be raw JSON-shaped mappings or already-normalized records.
    Output order: missing-in-backend (frontend order), missing-in-frontend
    (backend order), mismatch (frontend order).
    """
    frontend_records = normalize_collection(frontend, Side.FRONTEND)
    backend_records = normalize_collection(backend, Side.BACKEND)

    backend_by_key: dict[str, int] = {}
    backend_by_name: dict[str, int] = {}
    for position, record in enumerate(backend_records):
        backend_by_key.setdefault(record.key, position)
        if record.name:
            backend_by_name.setdefault(name_key(record.name), position)

    missing_in_backend: list[Difference] = []
    mismatches: list[Difference] = []
    matched_positions: set[int] = set()
    frontend_keys: set[str] = set()

    for record in frontend_records:
        frontend_keys.add(record.key)
        position = _match(record, backend_by_key, backend_by_name)
        if position is None:
            missing_in_backend.append(
                Difference(
                    kind=DifferenceKind.MISSING_IN_BACKEND,
                    key=record.key,
                    label=record.label,
                    frontend_record=record,
                )
            )
            continue
        matched_positions.add(position)
        counterpart = backend_records[position]
        field_diffs = compare_records(record, counterpart)
        if field_diffs:
            mismatches.append(
                Difference(
                    kind=DifferenceKind.MISMATCH,
                    key=record.key,
                    label=record.label,
                    frontend_record=record,
                    backend_record=counterpart,
                    field_diffs=field_diffs,
                )
            )

    missing_in_frontend: list[Difference] = []
    reported_backend_keys: set[str] = set()
    for position, record in enumerate(backend_records):
        if position in matched_positions or record.key in frontend_keys or record.key in reported_backend_keys:
            continue
        reported_backend_keys.add(record.key)
        missing_in_frontend.append(
            Difference(
                kind=DifferenceKind.MISSING_IN_FRONTEND,
                key=record.key,
                label=record.label,
                backend_record=record,
            )
        )

    duplicate_keys = _duplicate_keys(frontend_records)
    duplicate_keys += [key for key in _duplicate_keys(backend_records) if key not in duplicate_keys]
    if duplicate_keys:
        logger.warning("Duplicate record keys found: %s", ", ".join(duplicate_keys))

    report = Report.build(
        [*missing_in_backend, *missing_in_frontend, *mismatches],
        duplicate_keys=duplicate_keys,
        frontend_count=len(frontend_records),
        backend_count=len(backend_records),
    )
    logger.debug(
        "Diff complete: %d differences (%d frontend, %d backend records)",
        report.total_differences,
        len(frontend_records),
        len(backend_records),
    )
    return report


def _match(record: Record, by_key: dict[str, int], by_name: dict[str, int]) -> int | None:
    position = by_key.get(record.key)
    if position is not None or record.id is not None:
        return position
    # No persisted id: the key already is the normalized name.
    return by_name.get(record.key)


def _duplicate_keys(records: Sequence[Record]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for record in records:
        if record.key in seen and record.key not in duplicates:
            duplicates.append(record.key)
        seen.add(record.key)
    return duplicates


def _display_value(record: Record, field: str) -> Any:
    value = getattr(record, field)
    return list(value) if field in ARRAY_FIELDS else value
