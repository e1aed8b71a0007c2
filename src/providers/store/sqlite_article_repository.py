"""SQLite-backed article repository.

``publish`` writes the processed marker and the article in ONE
transaction, marker first.  The marker's ``UNIQUE(event_id)`` constraint
is therefore the first thing checked: a second invocation racing on the
same event fails with :class:`DuplicateMarkerError` before its article is
written, and the rollback leaves no orphan row behind.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from src.interfaces.article_repository import IArticleRepository
from src.models.article import ArticleListing, GeneratedArticle
from src.providers.store.schema import DEFAULT_DB_PATH, connect, initialize_database
from src.utils.errors import DuplicateMarkerError, PersistenceError

logger = structlog.get_logger(logger_name=__name__)

_ARTICLE_COLUMNS = (
    "id", "title", "slug", "excerpt", "content", "meta_title",
    "meta_description", "keywords", "tags", "read_time_minutes", "country",
    "city", "category", "event_id", "featured_image", "article_type",
    "status", "created_at", "updated_at",
)

# ── DML ───────────────────────────────────────────────────────────────

_INSERT_MARKER = """\
INSERT INTO blog_event_tracker (event_id, article_id, created_at)
VALUES (?, ?, ?);
"""

_INSERT_ARTICLE = f"""\
INSERT INTO blog_articles ({", ".join(_ARTICLE_COLUMNS)})
VALUES ({", ".join("?" for _ in _ARTICLE_COLUMNS)});
"""

_SELECT_BY_SLUG = f"""\
SELECT {", ".join(_ARTICLE_COLUMNS)} FROM blog_articles WHERE slug = ?;
"""

_SELECT_RECENT = """\
SELECT id, title, slug, created_at
FROM blog_articles
ORDER BY created_at DESC, id DESC
LIMIT ?;
"""


class SQLiteArticleRepository(IArticleRepository):
    """Generated articles stored in ``blog_articles``."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        await initialize_database(self._db_path)

    def get_provider_name(self) -> str:
        return "sqlite_articles"

    async def publish(self, article: GeneratedArticle) -> None:
        if not article.event_id:
            raise PersistenceError(
                message="Article has no originating event",
                provider_name=self.get_provider_name(),
            )
        async with connect(self._db_path) as db:
            try:
                await db.execute(
                    _INSERT_MARKER,
                    (article.event_id, article.id, article.created_at.isoformat()),
                )
            except aiosqlite.IntegrityError as exc:
                await db.rollback()
                raise DuplicateMarkerError(
                    message=f"Event {article.event_id} has already been processed",
                    provider_name=self.get_provider_name(),
                ) from exc

            try:
                await db.execute(_INSERT_ARTICLE, self._article_to_row(article))
                await db.commit()
            except aiosqlite.Error as exc:
                await db.rollback()
                raise PersistenceError(
                    message=f"Failed to save article: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc

        logger.info(
            "article_saved",
            article_id=article.id,
            event_id=article.event_id,
            slug=article.slug,
        )

    async def delete_all(self) -> int:
        async with connect(self._db_path) as db:
            cursor = await db.execute("DELETE FROM blog_articles;")
            await db.commit()
            deleted = cursor.rowcount
        logger.info("articles_deleted", count=deleted)
        return deleted

    async def count(self) -> int:
        async with connect(self._db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM blog_articles;")
            row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def list_recent(self, limit: int = 5) -> list[ArticleListing]:
        async with connect(self._db_path) as db:
            cursor = await db.execute(_SELECT_RECENT, (limit,))
            rows = await cursor.fetchall()
        return [ArticleListing.model_validate(dict(row)) for row in rows]

    async def get_by_slug(self, slug: str) -> GeneratedArticle | None:
        async with connect(self._db_path) as db:
            cursor = await db.execute(_SELECT_BY_SLUG, (slug,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_article(dict(row))

    # ── Row mapping ────────────────────────────────────────────────────

    @staticmethod
    def _article_to_row(article: GeneratedArticle) -> tuple[Any, ...]:
        return (
            article.id,
            article.title,
            article.slug,
            article.excerpt,
            article.content,
            article.meta_title,
            article.meta_description,
            json.dumps(article.keywords),
            json.dumps(article.tags),
            article.read_time_minutes,
            article.country,
            article.city,
            article.category,
            article.event_id,
            article.featured_image,
            article.article_type.value,
            article.status.value,
            article.created_at.isoformat(),
            article.updated_at.isoformat(),
        )

    @staticmethod
    def _row_to_article(row: dict[str, Any]) -> GeneratedArticle:
        row["keywords"] = json.loads(row["keywords"] or "[]")
        row["tags"] = json.loads(row["tags"] or "[]")
        row["created_at"] = datetime.fromisoformat(row["created_at"])
        row["updated_at"] = datetime.fromisoformat(row["updated_at"])
        return GeneratedArticle.model_validate(row)
