"""SQLite-backed processed-marker repository (``blog_event_tracker``)."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import aiosqlite
import structlog

from src.interfaces.marker_repository import IMarkerRepository
from src.models.article import ProcessedMarker
from src.providers.store.schema import DEFAULT_DB_PATH, connect, initialize_database
from src.utils.errors import EventFetchError

logger = structlog.get_logger(logger_name=__name__)


class SQLiteMarkerRepository(IMarkerRepository):
    """Reads and clears markers; they are written by the article repository."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        await initialize_database(self._db_path)

    def get_provider_name(self) -> str:
        return "sqlite_markers"

    async def processed_event_ids(self) -> set[str]:
        try:
            async with connect(self._db_path) as db:
                cursor = await db.execute("SELECT event_id FROM blog_event_tracker;")
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise EventFetchError(
                message=f"Failed to read processed events: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return {row["event_id"] for row in rows}

    async def get(self, event_id: str) -> ProcessedMarker | None:
        async with connect(self._db_path) as db:
            cursor = await db.execute(
                "SELECT event_id, article_id, created_at FROM blog_event_tracker "
                "WHERE event_id = ?;",
                (event_id,),
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return ProcessedMarker(
            event_id=row["event_id"],
            article_id=row["article_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    async def delete_all(self) -> int:
        async with connect(self._db_path) as db:
            cursor = await db.execute("DELETE FROM blog_event_tracker;")
            await db.commit()
            deleted = cursor.rowcount
        logger.info("markers_deleted", count=deleted)
        return deleted

    async def count(self) -> int:
        async with connect(self._db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM blog_event_tracker;")
            row = await cursor.fetchone()
        return int(row[0]) if row else 0
