"""Outcome of a full analyze-and-apply run."""

from __future__ import annotations

from pydantic import BaseModel

from contentsync.contracts.diff import Report
from contentsync.contracts.resolution import BatchResult, Resolution


class SyncResult(BaseModel):
    report: Report
    resolutions: dict[str, Resolution | str]
    batch: BatchResult

    @property
    def dry_run(self) -> bool:
        return self.batch.dry_run

    @property
    def converged(self) -> bool:
        """True when verification found no remaining differences."""
        verification = self.batch.verification
        return verification is not None and verification.total_differences == 0
