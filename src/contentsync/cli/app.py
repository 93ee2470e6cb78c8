"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from contentsync import AnalysisError, AuthenticationError, ConfigError, ProviderError, SyncError

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIG = 3
EXIT_PROVIDER = 4
EXIT_SYNC = 5
EXIT_PARTIAL = 6


def main(argv: list[str] | None = None) -> int:
    import contentsync.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "analyze":
            cli.asyncio.run(cli._run_analyze(args))
        elif args.command == "sync":
            result = cli.asyncio.run(cli._run_sync(args))
            if not result.batch.success:
                return EXIT_PARTIAL
        elif args.command == "health":
            cli.asyncio.run(cli._run_health(args))
        return EXIT_OK
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_PROVIDER
    except (AnalysisError, SyncError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SYNC
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED


__all__ = ["main"]
