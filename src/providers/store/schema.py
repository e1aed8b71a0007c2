"""SQLite schema for the nightsWriter record store.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Providers (shared by the three SQLite repositories).
#
# Database: ``data/nights.db`` (``DATABASE_PATH``) with three tables:
#
#   events              - listings written by the site / seed script,
#                         read-only for the pipeline
#   blog_articles       - generated articles (slug UNIQUE)
#   blog_event_tracker  - processed markers (event_id UNIQUE)
#
# A marker references its article with a DEFERRED foreign key so that
# the marker can be inserted first inside the publish transaction: the
# UNIQUE(event_id) check then fires before any article row is written.
#
# Uses ``aiosqlite`` for async I/O and ``PRAGMA journal_mode=WAL`` for
# concurrent read safety.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_DB_PATH = Path("data/nights.db")

# ── Schema DDL ────────────────────────────────────────────────────────

_CREATE_EVENTS_TABLE = """\
CREATE TABLE IF NOT EXISTS events (
    id              TEXT    PRIMARY KEY,
    title           TEXT    NOT NULL,
    description     TEXT,
    venue_name      TEXT,
    venue_address   TEXT,
    category        TEXT    NOT NULL DEFAULT 'events',
    start_date      TEXT,
    end_date        TEXT,
    start_time      TEXT,
    price           TEXT,
    cover_url       TEXT,
    image_url       TEXT,
    featured_image  TEXT,
    affiliate_url   TEXT,
    booking_url     TEXT,
    is_active       INTEGER NOT NULL DEFAULT 1,
    created_at      TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

_CREATE_ARTICLES_TABLE = """\
CREATE TABLE IF NOT EXISTS blog_articles (
    id                  TEXT    PRIMARY KEY,
    title               TEXT    NOT NULL,
    slug                TEXT    NOT NULL UNIQUE,
    excerpt             TEXT    NOT NULL DEFAULT '',
    content             TEXT    NOT NULL,
    meta_title          TEXT    NOT NULL DEFAULT '',
    meta_description    TEXT    NOT NULL DEFAULT '',
    keywords            TEXT    NOT NULL DEFAULT '[]',
    tags                TEXT    NOT NULL DEFAULT '[]',
    read_time_minutes   INTEGER NOT NULL DEFAULT 1,
    country             TEXT    NOT NULL DEFAULT 'unknown',
    city                TEXT,
    category            TEXT    NOT NULL DEFAULT 'events',
    event_id            TEXT,
    featured_image      TEXT,
    article_type        TEXT    NOT NULL DEFAULT 'event',
    status              TEXT    NOT NULL DEFAULT 'published',
    created_at          TEXT    NOT NULL,
    updated_at          TEXT    NOT NULL
);
"""

_CREATE_TRACKER_TABLE = """\
CREATE TABLE IF NOT EXISTS blog_event_tracker (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    event_id    TEXT    NOT NULL UNIQUE,
    article_id  TEXT    NOT NULL
                REFERENCES blog_articles(id) DEFERRABLE INITIALLY DEFERRED,
    created_at  TEXT    NOT NULL
);
"""

_CREATE_INDICES = [
    "CREATE INDEX IF NOT EXISTS idx_events_eligible ON events(is_active, start_date);",
    "CREATE INDEX IF NOT EXISTS idx_articles_created ON blog_articles(created_at);",
    "CREATE INDEX IF NOT EXISTS idx_articles_event ON blog_articles(event_id);",
]


@asynccontextmanager
async def connect(db_path: str | Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign keys enforced and ``Row`` results."""
    async with aiosqlite.connect(str(db_path)) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON;")
        yield db


async def initialize_database(db_path: str | Path = DEFAULT_DB_PATH) -> None:
    """Create all tables and indices if they don't exist."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(str(path)) as db:
        # WAL mode enables concurrent readers while a writer is active.
        await db.execute("PRAGMA journal_mode=WAL;")
        await db.execute(_CREATE_EVENTS_TABLE)
        await db.execute(_CREATE_ARTICLES_TABLE)
        await db.execute(_CREATE_TRACKER_TABLE)
        for idx_sql in _CREATE_INDICES:
            await db.execute(idx_sql)
        await db.commit()
    logger.info("nights_db_initialized", path=str(path))
