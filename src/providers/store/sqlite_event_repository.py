"""SQLite-backed event listing repository.

Reads eligible events for the generation pipeline.  ``insert_events`` is
used by ``scripts/seed_events.py`` and the test-suite to populate the
table; the pipeline itself never writes events.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import date
from pathlib import Path
from typing import Any

import aiosqlite
import structlog
from pydantic import ValidationError

from src.interfaces.event_repository import IEventRepository
from src.models.event import SourceEvent
from src.providers.store.schema import DEFAULT_DB_PATH, connect, initialize_database
from src.utils.errors import EventFetchError

logger = structlog.get_logger(logger_name=__name__)

_EVENT_COLUMNS = (
    "id", "title", "description", "venue_name", "venue_address", "category",
    "start_date", "end_date", "start_time", "price", "cover_url", "image_url",
    "featured_image", "affiliate_url", "booking_url", "is_active",
)

# Dates are ISO strings, so text comparison orders them chronologically.
_ELIGIBLE_WHERE = """\
is_active = 1
AND affiliate_url IS NOT NULL AND affiliate_url != ''
AND start_date IS NOT NULL AND start_date >= ?
"""

_UPSERT_EVENT = f"""\
INSERT OR REPLACE INTO events ({", ".join(_EVENT_COLUMNS)})
VALUES ({", ".join("?" for _ in _EVENT_COLUMNS)});
"""


class SQLiteEventRepository(IEventRepository):
    """Event listings stored in the ``events`` table."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        await initialize_database(self._db_path)

    def get_provider_name(self) -> str:
        return "sqlite_events"

    async def list_eligible(
        self,
        today: date,
        limit: int,
        exclude_ids: Collection[str] = (),
    ) -> list[SourceEvent]:
        params: list[Any] = [today.isoformat()]
        exclusion = ""
        if exclude_ids:
            placeholders = ", ".join("?" for _ in exclude_ids)
            exclusion = f"AND id NOT IN ({placeholders})"
            params.extend(exclude_ids)
        params.append(limit)

        query = f"""\
            SELECT {", ".join(_EVENT_COLUMNS)}
            FROM events
            WHERE {_ELIGIBLE_WHERE} {exclusion}
            ORDER BY start_date ASC, id ASC
            LIMIT ?;
        """
        try:
            async with connect(self._db_path) as db:
                cursor = await db.execute(query, params)
                rows = await cursor.fetchall()
            return [self._row_to_event(dict(row)) for row in rows]
        except aiosqlite.Error as exc:
            raise EventFetchError(
                message=f"Failed to fetch events from database: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValidationError as exc:
            raise EventFetchError(
                message=f"Invalid event row in database: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    async def count_eligible(self, today: date) -> int:
        query = f"SELECT COUNT(*) FROM events WHERE {_ELIGIBLE_WHERE};"
        try:
            async with connect(self._db_path) as db:
                cursor = await db.execute(query, (today.isoformat(),))
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise EventFetchError(
                message=f"Failed to count events: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return int(row[0]) if row else 0

    async def insert_events(self, events: Iterable[SourceEvent]) -> int:
        """Insert or replace *events*; returns the number written."""
        rows = [
            (
                e.id, e.title, e.description, e.venue_name, e.venue_address,
                e.category,
                e.start_date.isoformat() if e.start_date else None,
                e.end_date.isoformat() if e.end_date else None,
                e.start_time, e.price, e.cover_url, e.image_url,
                e.featured_image, e.affiliate_url, e.booking_url,
                1 if e.is_active else 0,
            )
            for e in events
        ]
        async with connect(self._db_path) as db:
            await db.executemany(_UPSERT_EVENT, rows)
            await db.commit()
        logger.info("events_inserted", count=len(rows))
        return len(rows)

    @staticmethod
    def _row_to_event(row: dict[str, Any]) -> SourceEvent:
        row["is_active"] = bool(row["is_active"])
        return SourceEvent.model_validate(row)
