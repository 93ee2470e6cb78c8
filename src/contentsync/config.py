"""Config file loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from contentsync.contracts.config import ContentSyncConfig, StoreSpec
from contentsync.contracts.exceptions import ConfigError


def _resolve_path(value: Path | None, *, base_dir: Path) -> Path | None:
    if value is None:
        return None
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def _resolve_store(spec: StoreSpec, *, base_dir: Path) -> StoreSpec:
    if spec.path is None:
        return spec
    return spec.model_copy(update={"path": _resolve_path(spec.path, base_dir=base_dir)})


def load_config(path: str | Path) -> ContentSyncConfig:
    """Load and validate config from JSON, resolving relative store paths against the config directory."""
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = ContentSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={
            "frontend": _resolve_store(parsed.frontend, base_dir=config_dir),
            "backend": _resolve_store(parsed.backend, base_dir=config_dir),
        }
    )


__all__ = ["load_config"]
