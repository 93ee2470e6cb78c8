"""Exception hierarchy for contentsync."""

from __future__ import annotations


class ContentSyncError(Exception):
    """Base exception for all contentsync errors."""


class ConfigError(ContentSyncError):
    """Configuration loading or validation failure."""


class ProviderError(ContentSyncError):
    """Base record-store operation failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderCapabilityError(ProviderError):
    """Record store lacks required capability."""

    def __init__(self, message: str, *, capability: str) -> None:
        super().__init__(message)
        self.capability = capability


class AuthenticationError(ProviderError):
    """Authentication/authorization failure."""


class AnalysisError(ContentSyncError):
    """Analysis could not produce a report."""


class FetchError(AnalysisError):
    """A collection could not be retrieved from one side."""

    def __init__(self, message: str, *, side: str) -> None:
        super().__init__(message)
        self.side = side


class ShapeError(AnalysisError):
    """A fetched collection or record does not have the expected shape."""


class InvalidResolutionError(ContentSyncError):
    """Resolution is not legal for the difference it is attached to."""

    def __init__(self, message: str, *, kind: str, resolution: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.resolution = resolution


class SyncError(ContentSyncError):
    """Orchestrator-level synchronization failure."""
