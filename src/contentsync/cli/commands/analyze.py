"""Analyze command formatting."""

from __future__ import annotations

import argparse

from contentsync import DifferenceKind, Report
from contentsync.cli.common import format_value, pluralize
from contentsync.cli.progress.rich import RichSyncProgress

_KIND_LABELS = {
    DifferenceKind.MISSING_IN_BACKEND: "Missing in backend",
    DifferenceKind.MISSING_IN_FRONTEND: "Missing in frontend",
    DifferenceKind.MISMATCH: "Mismatch",
}


def format_report(report: Report, *, collection: str) -> str:
    lines = [
        "",
        f"contentsync - analysis of '{collection}'",
        "",
        f"  Frontend:  {pluralize(report.frontend_count, 'record')}",
        f"  Backend:   {pluralize(report.backend_count, 'record')}",
        "",
    ]

    if report.total_differences == 0:
        lines.append("  Status:    collections are in sync")
    else:
        breakdown = ", ".join(
            f"{_KIND_LABELS[kind].lower()}: {count}" for kind, count in report.by_type.items() if count
        )
        lines.append(f"  Found:     {pluralize(report.total_differences, 'difference')} ({breakdown})")
        lines.append("")
        for difference in report.differences:
            lines.append(
                f"  [{difference.severity.value}] {_KIND_LABELS[difference.kind]}: {difference.label} "
                f"(key: {difference.key})"
            )
            for field_diff in difference.field_diffs:
                lines.append(
                    f"      {field_diff.field}: frontend={format_value(field_diff.frontend_value)} "
                    f"backend={format_value(field_diff.backend_value)}"
                )

    if report.duplicate_keys:
        lines.append("")
        lines.append(f"  Duplicate keys: {', '.join(report.duplicate_keys)}")

    lines.append("")
    return "\n".join(lines)


async def run_analyze(args: argparse.Namespace) -> Report:
    import contentsync.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose and not args.json:
        with RichSyncProgress() as progress:
            engine = await cli.ContentSync.from_config(config, progress=progress)
            report = await engine.analyze()
    else:
        engine = await cli.ContentSync.from_config(config)
        report = await engine.analyze()

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(cli._format_report(report, collection=config.collection))
    return report


__all__ = ["format_report", "run_analyze"]
