"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from contentsync.contracts.diff import DifferenceKind
from contentsync.contracts.resolution import LEGAL_RESOLUTIONS, Resolution


class StoreSpec(BaseModel):
    kind: Literal["http", "json", "memory"]
    url: str | None = None
    path: Path | None = None
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    records: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_kind_fields(self) -> StoreSpec:
        if self.kind == "http" and not (self.url or "").strip():
            raise ValueError("http store requires a url")
        if self.kind == "json" and self.path is None:
            raise ValueError("json store requires a path")
        return self


class ContentSyncConfig(BaseModel):
    collection: str = "team"
    frontend: StoreSpec
    backend: StoreSpec
    auth: str = "none"
    token: str | None = None
    token_env: str = "CONTENTSYNC_TOKEN"
    suggestions: dict[DifferenceKind, Resolution] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_auth_token(self) -> ContentSyncConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth not in {"none", "env", "token"}:
            raise ValueError("auth must be one of: none, env, token")
        return self

    @model_validator(mode="after")
    def validate_suggestions(self) -> ContentSyncConfig:
        for kind, resolution in self.suggestions.items():
            if resolution not in LEGAL_RESOLUTIONS[kind]:
                raise ValueError(f"suggestion {resolution} is not legal for {kind}")
        return self
