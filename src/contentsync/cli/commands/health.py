"""Health command."""

from __future__ import annotations

import argparse
from typing import Any


async def run_health(args: argparse.Namespace) -> dict[str, Any]:
    import contentsync.cli as cli

    config = cli.load_config(args.config)
    engine = await cli.ContentSync.from_config(config)
    payload = await engine.health()
    status = payload.get("status", "unknown")
    details = ", ".join(f"{key}={value}" for key, value in payload.items() if key != "status")
    print(f"backend: {status}" + (f" ({details})" if details else ""))
    return payload


__all__ = ["run_health"]
