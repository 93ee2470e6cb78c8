"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from contentsync.cli.common import parse_resolution_arg


def _package_version() -> str:
    try:
        return version("contentsync")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default="./contentsync.json", help="Path to contentsync.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contentsync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Compare frontend and backend collections")
    _add_common(analyze_parser)
    analyze_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    sync_parser = subparsers.add_parser("sync", help="Resolve differences and update the backend")
    _add_common(sync_parser)
    mode = sync_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--dry-run", action="store_true", help="Preview mode")
    mode.add_argument("--apply", action="store_true", help="Apply mode")
    sync_parser.add_argument(
        "--resolve",
        action="append",
        default=[],
        type=parse_resolution_arg,
        metavar="KEY=RESOLUTION",
        help="Resolution for one difference key (repeatable; overrides suggestions)",
    )
    sync_parser.add_argument(
        "--accept-suggestions",
        action="store_true",
        help="Resolve every difference with its suggested resolution",
    )

    health_parser = subparsers.add_parser("health", help="Check the backend health endpoint")
    _add_common(health_parser)

    return parser


__all__ = ["build_parser"]
