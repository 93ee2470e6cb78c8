"""Reconciliation engine exports."""

from contentsync.engine.differ import compare_records, diff
from contentsync.engine.normalizer import name_key, normalize, normalize_collection
from contentsync.engine.orchestrator import SyncOrchestrator, fetch_collection
from contentsync.engine.planner import (
    DEFAULT_POLICY,
    MutationKind,
    PlannedMutation,
    ResolutionPolicy,
    is_legal,
    plan_mutation,
    suggest,
    suggest_all,
    validate_resolution,
)
from contentsync.engine.progress import NullSyncProgress, SyncProgress

__all__ = [
    "DEFAULT_POLICY",
    "MutationKind",
    "NullSyncProgress",
    "PlannedMutation",
    "ResolutionPolicy",
    "SyncOrchestrator",
    "SyncProgress",
    "compare_records",
    "diff",
    "fetch_collection",
    "is_legal",
    "name_key",
    "normalize",
    "normalize_collection",
    "plan_mutation",
    "suggest",
    "suggest_all",
    "validate_resolution",
]
