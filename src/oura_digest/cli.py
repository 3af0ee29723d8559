"""CLI entry point: build and push the daily Oura digest."""

import argparse
import asyncio
from datetime import datetime

import structlog

from .config import get_settings
from .errors import ConfigError, DigestError
from .logging import setup_bootstrap_logging, setup_logging
from .metrics import push_metrics
from .pipeline import DigestPipeline
from .tracing import setup_tracing, shutdown_tracing

logger = structlog.get_logger(__name__)


def parse_instant(value: str) -> datetime:
    """Parse an ISO 8601 instant that carries a UTC offset."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 instant: {value!r}") from e
    if parsed.tzinfo is None:
        raise argparse.ArgumentTypeError(f"instant must include a UTC offset: {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oura-digest",
        description="Send yesterday's Oura activity and sleep digest via LINE",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the message but don't send it (implies --stdout)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the message to stdout",
    )
    parser.add_argument(
        "--now",
        type=parse_instant,
        default=None,
        help="Reference instant with offset, e.g. 2024-05-02T07:30:00+09:00 (default: now)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI: oura-digest -- fetch, compose and push the daily digest.

    Exits 0 when a report or the fallback message was sent, 1 on any error.
    """
    args = build_parser().parse_args(argv)
    setup_bootstrap_logging()

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error("digest_failed", error_type=type(e).__name__, error=str(e))
        raise SystemExit(1) from e

    setup_logging(settings.app)
    provider = setup_tracing(settings.tracing)

    try:
        result = asyncio.run(DigestPipeline(settings).run(now=args.now, dry_run=args.dry_run))
    except DigestError as e:
        logger.error("digest_failed", error_type=type(e).__name__, error=str(e))
        raise SystemExit(1) from e
    finally:
        push_metrics(settings.metrics)
        shutdown_tracing(provider)

    if args.stdout or args.dry_run:
        print(result.message)


if __name__ == "__main__":
    main()
