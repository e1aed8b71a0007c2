#!/usr/bin/env python3
"""Load event listings into the local SQLite record store.

The generation pipeline only reads events; in production they come from
the listing site.  For local development and demos this script inserts
them from a YAML (or JSON) file holding a list of event objects, or a
mapping with an ``events`` key.

Usage:
    python scripts/seed_events.py config/sample_events.yaml
    python scripts/seed_events.py events.json --db data/dev.db
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.config.settings import Settings
from src.models.event import SourceEvent
from src.providers.store.sqlite_event_repository import SQLiteEventRepository
from src.utils.logging import configure_logging


def load_events(path: Path) -> list[SourceEvent]:
    """Parse *path* into validated events."""
    with open(path) as f:
        data = yaml.safe_load(f) or []
    if isinstance(data, dict):
        data = data.get("events", [])
    return [SourceEvent.model_validate(item) for item in data]


async def seed(path: Path, db_path: str) -> int:
    events = load_events(path)
    repository = SQLiteEventRepository(db_path)
    await repository.initialize()
    return await repository.insert_events(events)


def main() -> None:
    app_settings = Settings()
    configure_logging(log_level=app_settings.log_level, app_env=app_settings.app_env)

    parser = argparse.ArgumentParser(description="Seed event listings into SQLite.")
    parser.add_argument("file", type=Path, help="YAML/JSON file with a list of events")
    parser.add_argument(
        "--db",
        default=app_settings.database_path,
        help=f"SQLite database path (default: {app_settings.database_path})",
    )
    args = parser.parse_args()

    if not args.file.exists():
        print(f"Error: {args.file} not found", file=sys.stderr)
        sys.exit(1)

    try:
        count = asyncio.run(seed(args.file, args.db))
    except ValidationError as exc:
        print(f"Error: invalid event data:\n{exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Seeded {count} events into {args.db}")


if __name__ == "__main__":
    main()
