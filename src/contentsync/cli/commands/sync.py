"""Sync command formatting."""

from __future__ import annotations

import argparse

from contentsync import ContentSyncConfig, SyncResult
from contentsync.cli.common import pluralize
from contentsync.cli.progress.rich import RichSyncProgress


def format_sync_summary(result: SyncResult, config: ContentSyncConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    batch = result.batch
    lines = [
        "",
        f"contentsync - sync complete ({mode})",
        "",
        f"  Collection: {config.collection}",
        f"  Analyzed:   {pluralize(result.report.total_differences, 'difference')}",
        f"  Resolved:   {pluralize(len(result.resolutions), 'key')}",
        "",
    ]

    for item in batch.results:
        marker = "✅" if item.success else "❌"
        lines.append(f"  {marker} {item.name} [{item.resolution}] {item.message}")
    if batch.results:
        lines.append("")

    lines.append(f"  Result:     {batch.message}")
    if batch.verification is not None:
        remaining = batch.verification.total_differences
        if remaining == 0:
            lines.append("  Verify:     collections are in sync")
        else:
            lines.append(f"  Verify:     {pluralize(remaining, 'difference')} remaining")
    elif batch.verification_error is not None:
        lines.append(f"  Verify:     failed ({batch.verification_error})")
    else:
        lines.append("  Verify:     skipped (batch had failures)")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> SyncResult:
    import contentsync.cli as cli

    config = cli.load_config(args.config)
    resolutions = dict(args.resolve)

    if not args.verbose:
        with RichSyncProgress() as progress:
            engine = await cli.ContentSync.from_config(config, progress=progress)
            result = await engine.apply(
                resolutions, accept_suggestions=args.accept_suggestions, dry_run=args.dry_run
            )
    else:
        engine = await cli.ContentSync.from_config(config)
        result = await engine.apply(resolutions, accept_suggestions=args.accept_suggestions, dry_run=args.dry_run)

    print(cli._format_summary(result, config))
    return result


__all__ = ["format_sync_summary", "run_sync"]
