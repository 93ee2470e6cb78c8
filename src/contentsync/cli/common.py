"""Shared CLI formatting helpers."""

from __future__ import annotations

import argparse
from typing import Any

from contentsync import Resolution


def parse_resolution_arg(value: str) -> tuple[str, str]:
    key, sep, resolution = value.rpartition("=")
    if not sep or not key.strip() or not resolution.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=RESOLUTION, got {value!r}")
    resolution = resolution.strip().upper()
    choices = {item.value for item in Resolution}
    if resolution not in choices:
        raise argparse.ArgumentTypeError(
            f"unknown resolution {resolution!r} (choose from {', '.join(sorted(choices))})"
        )
    return key.strip(), resolution


def format_value(value: Any) -> str:
    if value is None:
        return "(unset)"
    if isinstance(value, list):
        return "[" + ", ".join(str(item) for item in value) + "]"
    if value == "":
        return '""'
    return str(value)


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"
