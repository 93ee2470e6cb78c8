"""Public contracts for contentsync."""

from contentsync.contracts.config import ContentSyncConfig, StoreSpec
from contentsync.contracts.diff import SEVERITY_BY_KIND, Difference, DifferenceKind, FieldDiff, Report, Severity
from contentsync.contracts.exceptions import (
    AnalysisError,
    AuthenticationError,
    ConfigError,
    ContentSyncError,
    FetchError,
    InvalidResolutionError,
    ProviderCapabilityError,
    ProviderError,
    ShapeError,
    SyncError,
)
from contentsync.contracts.record import ARRAY_FIELDS, COMPARABLE_FIELDS, Record, Side
from contentsync.contracts.resolution import LEGAL_RESOLUTIONS, BatchResult, ItemResult, Resolution
from contentsync.contracts.store import RecordStore
from contentsync.contracts.sync import SyncResult

__all__ = [
    "ARRAY_FIELDS",
    "COMPARABLE_FIELDS",
    "LEGAL_RESOLUTIONS",
    "SEVERITY_BY_KIND",
    "AnalysisError",
    "AuthenticationError",
    "BatchResult",
    "ConfigError",
    "ContentSyncConfig",
    "ContentSyncError",
    "Difference",
    "DifferenceKind",
    "FetchError",
    "FieldDiff",
    "InvalidResolutionError",
    "ItemResult",
    "ProviderCapabilityError",
    "ProviderError",
    "Record",
    "RecordStore",
    "Report",
    "Resolution",
    "Severity",
    "ShapeError",
    "Side",
    "StoreSpec",
    "SyncError",
    "SyncResult",
]
