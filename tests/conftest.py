"""Shared pytest fixtures for the nightsWriter test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config.loader import DEFAULT_REVALIDATION_PATHS
from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.page_revalidator import IPageRevalidator
from src.models.event import SourceEvent
from src.pipeline.blog_pipeline import BlogGenerationPipeline
from src.providers.store.schema import initialize_database
from src.providers.store.sqlite_article_repository import SQLiteArticleRepository
from src.providers.store.sqlite_event_repository import SQLiteEventRepository
from src.providers.store.sqlite_marker_repository import SQLiteMarkerRepository
from src.services.article_writer import ArticleWriter
from src.services.location_resolver import LocationResolver

# "Now" for every pipeline test; events are dated relative to it.
FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
TODAY = FIXED_NOW.date()


def article_json(
    title: str = "Riyadh Season Concert at Boulevard City",
    slug: str = "riyadh-season-concert-riyadh",
    content: str = "<h2>Live in Riyadh</h2><p>Join us at Boulevard City, Riyadh.</p>",
    **overrides: Any,
) -> str:
    """Return a model response body shaped like a real generation reply."""
    payload: dict[str, Any] = {
        "title": title,
        "slug": slug,
        "excerpt": "A night of live music in Riyadh, Saudi Arabia.",
        "content": content,
        "meta_title": title,
        "meta_description": "Get tickets for the Riyadh Season Concert at Boulevard City.",
        "keywords": ["riyadh events", "concerts", "things to do in riyadh"],
        "tags": ["Riyadh", "Saudi Arabia", "concerts"],
        "read_time_minutes": 3,
    }
    payload.update(overrides)
    return json.dumps(payload)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isolated from any developer .env file."""
    return Settings(
        _env_file=None,
        anthropic_api_key="test-anthropic",
        openai_api_key="",
        blog_generation_secret="s3cret",
        database_path=str(tmp_path / "nights.db"),
        revalidate_url="",
        generation_batch_size=1,
        generation_max_batch_size=10,
    )


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "nights.db"


@pytest.fixture
async def event_repository(db_path: Path) -> SQLiteEventRepository:
    await initialize_database(db_path)
    return SQLiteEventRepository(db_path)


@pytest.fixture
async def article_repository(db_path: Path) -> SQLiteArticleRepository:
    await initialize_database(db_path)
    return SQLiteArticleRepository(db_path)


@pytest.fixture
async def marker_repository(db_path: Path) -> SQLiteMarkerRepository:
    await initialize_database(db_path)
    return SQLiteMarkerRepository(db_path)


@pytest.fixture
def make_event() -> Callable[..., SourceEvent]:
    """Factory for eligible events; override any field by keyword."""

    def _make(**overrides: Any) -> SourceEvent:
        fields: dict[str, Any] = {
            "id": "evt-1",
            "title": "Riyadh Season Concert",
            "description": "Live music on the Boulevard City main stage.",
            "venue_name": "Boulevard City",
            "venue_address": "Riyadh, Saudi Arabia",
            "category": "concerts",
            "start_date": date(2027, 3, 1),
            "start_time": "20:00",
            "price": "From SAR 150",
            "cover_url": "https://img.example.com/cover.jpg",
            "affiliate_url": "https://tickets.example.com/riyadh",
            "is_active": True,
        }
        fields.update(overrides)
        return SourceEvent(**fields)

    return _make


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm() -> MagicMock:
    """Available LLM provider whose completion returns a valid article."""
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value=article_json())
    llm.is_available.return_value = True
    llm.get_provider_name.return_value = "mock_llm"
    return llm


@pytest.fixture
def mock_revalidator() -> MagicMock:
    revalidator = MagicMock(spec=IPageRevalidator)
    revalidator.revalidate = AsyncMock(return_value=None)
    revalidator.get_provider_name.return_value = "mock_revalidator"
    return revalidator


@pytest.fixture
def pipeline(
    mock_llm: MagicMock,
    mock_revalidator: MagicMock,
    event_repository: SQLiteEventRepository,
    article_repository: SQLiteArticleRepository,
    marker_repository: SQLiteMarkerRepository,
) -> BlogGenerationPipeline:
    """Pipeline over a real temp-file SQLite store with a mocked LLM."""
    counter = iter(range(1, 10_000))
    return BlogGenerationPipeline(
        llm_provider=mock_llm,
        article_writer=ArticleWriter(llm_provider=mock_llm),
        location_resolver=LocationResolver(),
        event_repository=event_repository,
        article_repository=article_repository,
        marker_repository=marker_repository,
        page_revalidator=mock_revalidator,
        revalidation_paths=list(DEFAULT_REVALIDATION_PATHS),
        clock=lambda: FIXED_NOW,
        id_factory=lambda: f"art-{next(counter):04d}",
    )
