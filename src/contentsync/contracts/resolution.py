"""Resolution and batch result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from contentsync.contracts.diff import DifferenceKind, Report


class Resolution(StrEnum):
    CREATE_IN_BACKEND = "CREATE_IN_BACKEND"
    DELETE_IN_FRONTEND = "DELETE_IN_FRONTEND"
    USE_FRONTEND = "USE_FRONTEND"
    USE_BACKEND = "USE_BACKEND"


LEGAL_RESOLUTIONS: dict[DifferenceKind, frozenset[Resolution]] = {
    DifferenceKind.MISSING_IN_BACKEND: frozenset({Resolution.CREATE_IN_BACKEND, Resolution.DELETE_IN_FRONTEND}),
    DifferenceKind.MISSING_IN_FRONTEND: frozenset({Resolution.USE_BACKEND}),
    DifferenceKind.MISMATCH: frozenset({Resolution.USE_FRONTEND, Resolution.USE_BACKEND}),
}


class ItemResult(BaseModel):
    key: str
    name: str
    resolution: str
    success: bool
    message: str = ""
    error: str | None = None


class BatchResult(BaseModel):
    success: bool
    results: list[ItemResult] = Field(default_factory=list)
    message: str = ""
    dry_run: bool = False
    verification: Report | None = None
    verification_error: str | None = None

    @property
    def failed(self) -> list[ItemResult]:
        return [result for result in self.results if not result.success]
