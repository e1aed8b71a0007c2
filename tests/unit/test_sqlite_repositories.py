"""Unit tests for the SQLite event, article and marker repositories.

Each test runs against a fresh temp-file database (see ``db_path``).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import aiosqlite
import pytest

from src.models.article import GeneratedArticle
from src.providers.store.schema import initialize_database
from src.providers.store.sqlite_event_repository import SQLiteEventRepository
from src.utils.errors import DuplicateMarkerError, EventFetchError, PersistenceError
from tests.conftest import FIXED_NOW, TODAY


def _article(
    article_id: str = "art-1",
    event_id: str | None = "evt-1",
    slug: str = "riyadh-season-concert-evt-1",
    created_at: datetime = FIXED_NOW,
) -> GeneratedArticle:
    return GeneratedArticle(
        id=article_id,
        title="Riyadh Season Concert",
        slug=slug,
        excerpt="Live music in Riyadh.",
        content="<p>Live music in Riyadh.</p>",
        keywords=["riyadh", "concerts"],
        tags=["Riyadh", "Saudi Arabia"],
        read_time_minutes=2,
        country="Saudi Arabia",
        city="Riyadh",
        category="concerts",
        event_id=event_id,
        featured_image="https://img.example.com/cover.jpg",
        created_at=created_at,
        updated_at=created_at,
    )


# ── Schema ────────────────────────────────────────────────────────────


class TestSchema:
    @pytest.mark.asyncio
    async def test_initialize_is_idempotent_and_creates_parent(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "nights.db"
        await initialize_database(path)
        await initialize_database(path)

        async with aiosqlite.connect(str(path)) as db:
            cursor = await db.execute("SELECT name FROM sqlite_master WHERE type='table';")
            tables = {row[0] for row in await cursor.fetchall()}
        assert {"events", "blog_articles", "blog_event_tracker"} <= tables

    @pytest.mark.asyncio
    async def test_wal_mode_enabled(self, db_path, event_repository) -> None:
        async with aiosqlite.connect(str(db_path)) as db:
            cursor = await db.execute("PRAGMA journal_mode;")
            row = await cursor.fetchone()
        assert row[0] == "wal"


# ── Events ────────────────────────────────────────────────────────────


class TestEventRepository:
    @pytest.mark.asyncio
    async def test_eligibility_filters(self, event_repository, make_event) -> None:
        await event_repository.insert_events([
            make_event(id="ok"),
            make_event(id="inactive", is_active=False),
            make_event(id="no-affiliate", affiliate_url=None),
            make_event(id="empty-affiliate", affiliate_url=""),
            make_event(id="past", start_date=TODAY - timedelta(days=1)),
            make_event(id="undated", start_date=None),
            make_event(id="today", start_date=TODAY),
        ])

        events = await event_repository.list_eligible(TODAY, limit=10)

        assert [e.id for e in events] == ["today", "ok"]
        assert await event_repository.count_eligible(TODAY) == 2

    @pytest.mark.asyncio
    async def test_ordered_by_start_date_then_id(self, event_repository, make_event) -> None:
        await event_repository.insert_events([
            make_event(id="c", start_date=date(2027, 5, 1)),
            make_event(id="b", start_date=date(2027, 1, 1)),
            make_event(id="a", start_date=date(2027, 5, 1)),
        ])
        events = await event_repository.list_eligible(TODAY, limit=10)
        assert [e.id for e in events] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_limit_and_exclusions(self, event_repository, make_event) -> None:
        await event_repository.insert_events(
            [make_event(id=f"evt-{i}", start_date=date(2027, 1, i + 1)) for i in range(5)]
        )

        first_two = await event_repository.list_eligible(TODAY, limit=2)
        assert [e.id for e in first_two] == ["evt-0", "evt-1"]

        rest = await event_repository.list_eligible(
            TODAY, limit=10, exclude_ids={"evt-0", "evt-1", "evt-3"}
        )
        assert [e.id for e in rest] == ["evt-2", "evt-4"]

    @pytest.mark.asyncio
    async def test_round_trips_event_fields(self, event_repository, make_event) -> None:
        original = make_event(end_date=date(2027, 3, 3), booking_url="https://book.example.com")
        await event_repository.insert_events([original])
        (loaded,) = await event_repository.list_eligible(TODAY, limit=1)
        assert loaded == original

    @pytest.mark.asyncio
    async def test_insert_replaces_existing(self, event_repository, make_event) -> None:
        await event_repository.insert_events([make_event(title="Old")])
        await event_repository.insert_events([make_event(title="New")])
        (loaded,) = await event_repository.list_eligible(TODAY, limit=5)
        assert loaded.title == "New"

    @pytest.mark.asyncio
    async def test_missing_table_raises_fetch_error(self, tmp_path) -> None:
        repo = SQLiteEventRepository(tmp_path / "empty.db")
        with pytest.raises(EventFetchError):
            await repo.list_eligible(TODAY, limit=1)

    @pytest.mark.asyncio
    async def test_malformed_row_raises_fetch_error(self, db_path, event_repository) -> None:
        async with aiosqlite.connect(str(db_path)) as db:
            await db.execute(
                "INSERT INTO events (id, title, start_date, affiliate_url) "
                "VALUES ('bad', 'Broken', '2027-13-45', 'https://tickets.example.com');"
            )
            await db.commit()

        with pytest.raises(EventFetchError, match="Invalid event row") as exc_info:
            await event_repository.list_eligible(TODAY, limit=5)

        assert exc_info.value.provider_name == "sqlite_events"


# ── Articles + markers ────────────────────────────────────────────────


class TestArticleRepository:
    @pytest.mark.asyncio
    async def test_publish_writes_article_and_marker(
        self, article_repository, marker_repository
    ) -> None:
        await article_repository.publish(_article())

        stored = await article_repository.get_by_slug("riyadh-season-concert-evt-1")
        assert stored is not None
        assert stored.keywords == ["riyadh", "concerts"]
        assert stored.country == "Saudi Arabia"
        assert stored.created_at == FIXED_NOW

        marker = await marker_repository.get("evt-1")
        assert marker is not None
        assert marker.article_id == "art-1"
        assert await marker_repository.processed_event_ids() == {"evt-1"}

    @pytest.mark.asyncio
    async def test_duplicate_marker_leaves_no_orphan(
        self, article_repository, marker_repository
    ) -> None:
        await article_repository.publish(_article())

        with pytest.raises(DuplicateMarkerError):
            await article_repository.publish(
                _article(article_id="art-2", slug="another-slug-evt-1")
            )

        assert await article_repository.count() == 1
        assert await article_repository.get_by_slug("another-slug-evt-1") is None
        assert await marker_repository.count() == 1

    @pytest.mark.asyncio
    async def test_slug_collision_rolls_back_marker(
        self, article_repository, marker_repository
    ) -> None:
        await article_repository.publish(_article())

        with pytest.raises(PersistenceError) as exc_info:
            await article_repository.publish(_article(article_id="art-2", event_id="evt-2"))

        assert not isinstance(exc_info.value, DuplicateMarkerError)
        assert await marker_repository.get("evt-2") is None
        assert await article_repository.count() == 1

    @pytest.mark.asyncio
    async def test_publish_without_event_rejected(self, article_repository) -> None:
        with pytest.raises(PersistenceError, match="no originating event"):
            await article_repository.publish(_article(event_id=None))

    @pytest.mark.asyncio
    async def test_list_recent_newest_first(self, article_repository) -> None:
        for i in range(7):
            await article_repository.publish(
                _article(
                    article_id=f"art-{i}",
                    event_id=f"evt-{i}",
                    slug=f"slug-{i}",
                    created_at=FIXED_NOW + timedelta(minutes=i),
                )
            )

        recent = await article_repository.list_recent(limit=5)

        assert [a.id for a in recent] == ["art-6", "art-5", "art-4", "art-3", "art-2"]
        assert recent[0].created_at == FIXED_NOW + timedelta(minutes=6)

    @pytest.mark.asyncio
    async def test_delete_all_after_markers(
        self, article_repository, marker_repository
    ) -> None:
        await article_repository.publish(_article())
        await article_repository.publish(
            _article(article_id="art-2", event_id="evt-2", slug="slug-2")
        )

        assert await marker_repository.delete_all() == 2
        assert await article_repository.delete_all() == 2
        assert await article_repository.count() == 0
        assert await marker_repository.processed_event_ids() == set()

    @pytest.mark.asyncio
    async def test_delete_all_on_empty_store(
        self, article_repository, marker_repository
    ) -> None:
        assert await marker_repository.delete_all() == 0
        assert await article_repository.delete_all() == 0

    @pytest.mark.asyncio
    async def test_get_by_slug_missing(self, article_repository) -> None:
        assert await article_repository.get_by_slug("nope") is None
