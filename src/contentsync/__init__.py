"""Public API surface for contentsync."""

__version__ = "0.3.0"

from contentsync.auth import create_token_resolver
from contentsync.config import load_config
from contentsync.contracts.config import ContentSyncConfig, StoreSpec
from contentsync.contracts.diff import Difference, DifferenceKind, FieldDiff, Report, Severity
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
from contentsync.contracts.record import Record, Side
from contentsync.contracts.resolution import LEGAL_RESOLUTIONS, BatchResult, ItemResult, Resolution
from contentsync.contracts.store import RecordStore
from contentsync.contracts.sync import SyncResult
from contentsync.engine import ResolutionPolicy, SyncOrchestrator, diff, normalize
from contentsync.engine.progress import SyncProgress
from contentsync.sdk import ContentSync
from contentsync.stores import create_store

__all__ = [
    "LEGAL_RESOLUTIONS",
    "AnalysisError",
    "AuthenticationError",
    "BatchResult",
    "ConfigError",
    "ContentSync",
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
    "ResolutionPolicy",
    "Severity",
    "ShapeError",
    "Side",
    "StoreSpec",
    "SyncError",
    "SyncOrchestrator",
    "SyncProgress",
    "SyncResult",
    "__version__",
    "create_store",
    "create_token_resolver",
    "diff",
    "load_config",
    "normalize",
]
