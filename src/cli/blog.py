# =============================================================================
# src/cli/blog.py - Blog Generator CLI
# =============================================================================
#
# Runs the content generation pipeline without the web server, e.g. from
# cron or during local development.  Uses the same component factory as
# the API (src/main.py:build_components), so behaviour is identical.
#
# Supported subcommands:
#
#   generate  - write articles for the next eligible events
#   cleanup   - delete every generated article and processed marker
#   stats     - print generator statistics
#
# Usage examples:
#   python -m src.cli.blog generate --batch-size 3
#   python -m src.cli.blog cleanup --yes
#   python -m src.cli.blog stats --json
# =============================================================================

"""Standalone CLI for the nightsWriter blog generator.

Usage::

    python -m src.cli.blog generate [--batch-size N] [--json]
    python -m src.cli.blog cleanup --yes
    python -m src.cli.blog stats [--json]

Exit code 0 on success, 1 on a request-level error or when any event
failed during ``generate``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from src.config.settings import Settings
from src.utils.errors import NightsWriterError
from src.utils.logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.blog",
        description="Generate blog articles from upcoming event listings.",
    )
    subparsers = parser.add_subparsers(dest="command")

    gen = subparsers.add_parser("generate", help="Generate articles for eligible events")
    gen.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Events to process (default: GENERATION_BATCH_SIZE, capped at the max)",
    )
    gen.add_argument("--json", action="store_true", help="Print the raw JSON result")

    clean = subparsers.add_parser("cleanup", help="Delete all generated articles")
    clean.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    stats = subparsers.add_parser("stats", help="Show generator statistics")
    stats.add_argument("--json", action="store_true", help="Print the raw JSON result")

    return parser


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _handle_generate(args: argparse.Namespace, components: dict[str, Any]) -> int:
    app_settings: Settings = components["settings"]
    size = app_settings.clamp_batch_size(args.batch_size)
    result = await components["pipeline"].generate(batch_size=size)

    if args.json:
        _print_json(result.model_dump(mode="json"))
    else:
        print(result.message)
        for article in result.articles:
            print(f"  + {article.article_title}  (/blog/{article.slug})")
        for error in result.errors:
            print(f"  ! {error.event_title}: {error.error}")
        if result.skipped:
            print(f"  Skipped (already processed): {result.skipped}")
        if result.processed and not result.revalidated:
            print("  Warning: page revalidation failed")
    return 1 if result.failed else 0


async def _handle_cleanup(args: argparse.Namespace, components: dict[str, Any]) -> int:
    if not args.yes:
        answer = input("Delete ALL generated articles and tracker entries? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return 0

    result = await components["pipeline"].cleanup()
    print(result.message)
    return 0


async def _handle_stats(args: argparse.Namespace, components: dict[str, Any]) -> int:
    stats = await components["pipeline"].get_stats()

    if args.json:
        _print_json(stats.model_dump(mode="json"))
        return 0

    print("Blog generator statistics:")
    print(f"  Articles published: {stats.total_articles}")
    print(f"  Events blogged:     {stats.processed_events}")
    print(f"  Eligible events:    {stats.eligible_events}")
    print(f"  Remaining events:   {stats.remaining_events}")
    print(f"  Generation API:     {stats.llm_provider or 'not configured'}")
    if stats.recent_articles:
        print("  Recent articles:")
        for article in stats.recent_articles:
            print(f"    {article.created_at:%Y-%m-%d %H:%M}  {article.title}")
    return 0


_HANDLERS = {
    "generate": _handle_generate,
    "cleanup": _handle_cleanup,
    "stats": _handle_stats,
}


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    # Deferred: importing src.main builds the FastAPI app.
    from src.main import build_components
    from src.providers.store.schema import initialize_database

    components = build_components(app_settings)
    try:
        await initialize_database(app_settings.database_path)
        return await _HANDLERS[args.command](args, components)
    except NightsWriterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await components["http_client"].aclose()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse arguments, run the command, exit with its code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    configure_logging(log_level=app_settings.log_level, app_env=app_settings.app_env)

    sys.exit(asyncio.run(_run(args, app_settings)))


if __name__ == "__main__":
    main()
