"""Difference and report contracts."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from contentsync.contracts.record import Record


class DifferenceKind(StrEnum):
    MISSING_IN_BACKEND = "MISSING_IN_BACKEND"
    MISSING_IN_FRONTEND = "MISSING_IN_FRONTEND"
    MISMATCH = "MISMATCH"


class Severity(StrEnum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


SEVERITY_BY_KIND: dict[DifferenceKind, Severity] = {
    DifferenceKind.MISSING_IN_BACKEND: Severity.HIGH,
    DifferenceKind.MISSING_IN_FRONTEND: Severity.MEDIUM,
    DifferenceKind.MISMATCH: Severity.MEDIUM,
}


class FieldDiff(BaseModel):
    field: str
    frontend_value: Any = None
    backend_value: Any = None

    model_config = {"frozen": True}


class Difference(BaseModel):
    """One discrepancy between the two collections for a single entity."""

    kind: DifferenceKind
    key: str
    label: str
    frontend_record: Record | None = None
    backend_record: Record | None = None
    field_diffs: tuple[FieldDiff, ...] = ()
    severity: Severity = Severity.MEDIUM

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def default_severity(cls, data: Any) -> Any:
        if isinstance(data, dict) and "severity" not in data and "kind" in data:
            data = {**data, "severity": SEVERITY_BY_KIND[DifferenceKind(data["kind"])]}
        return data

    @model_validator(mode="after")
    def validate_shape(self) -> Difference:
        has_frontend = self.frontend_record is not None
        has_backend = self.backend_record is not None
        if self.kind == DifferenceKind.MISSING_IN_BACKEND and (not has_frontend or has_backend):
            raise ValueError("MISSING_IN_BACKEND requires a frontend record and no backend record")
        if self.kind == DifferenceKind.MISSING_IN_FRONTEND and (has_frontend or not has_backend):
            raise ValueError("MISSING_IN_FRONTEND requires a backend record and no frontend record")
        if self.kind == DifferenceKind.MISMATCH:
            if not (has_frontend and has_backend):
                raise ValueError("MISMATCH requires both records")
            if not self.field_diffs:
                raise ValueError("MISMATCH requires at least one field diff")
        elif self.field_diffs:
            raise ValueError(f"{self.kind} cannot carry field diffs")
        return self


class Report(BaseModel):
    total_differences: int
    by_type: dict[DifferenceKind, int]
    by_severity: dict[Severity, int]
    differences: list[Difference] = Field(default_factory=list)
    duplicate_keys: list[str] = Field(default_factory=list)
    frontend_count: int = 0
    backend_count: int = 0

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        differences: Iterable[Difference],
        *,
        duplicate_keys: Iterable[str] = (),
        frontend_count: int = 0,
        backend_count: int = 0,
    ) -> Report:
        ordered = list(differences)
        by_type = {kind: 0 for kind in DifferenceKind}
        by_severity = {severity: 0 for severity in Severity}
        for difference in ordered:
            by_type[difference.kind] += 1
            by_severity[difference.severity] += 1
        return cls(
            total_differences=sum(by_type.values()),
            by_type=by_type,
            by_severity=by_severity,
            differences=ordered,
            duplicate_keys=list(duplicate_keys),
            frontend_count=frontend_count,
            backend_count=backend_count,
        )

    def keys(self, kind: DifferenceKind | None = None) -> list[str]:
        return [d.key for d in self.differences if kind is None or d.kind == kind]

    def find(self, key: str) -> list[Difference]:
        return [d for d in self.differences if d.key == key]
