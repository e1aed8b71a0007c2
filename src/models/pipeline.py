"""Result models for generation runs, cleanup and statistics.

These are the values the pipeline hands back to its callers (HTTP routes
and the CLI).  The API layer serialises them unchanged, so field names
match the JSON the operator dashboard expects.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.models.article import ArticleListing


class PublishedArticle(BaseModel):
    """One successfully generated article in a run."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    event_title: str
    article_id: str
    article_title: str
    slug: str


class FailedEvent(BaseModel):
    """One event whose generation or save failed in a run."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    event_title: str
    error: str = Field(min_length=1)


class GenerationResult(BaseModel):
    """Outcome of one Generate run."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str
    processed: int = 0
    failed: int = 0
    skipped: int = Field(
        default=0,
        description="Events another invocation published first (no duplicate written).",
    )
    revalidated: bool = False
    articles: list[PublishedArticle] = Field(default_factory=list)
    errors: list[FailedEvent] = Field(default_factory=list)


class CleanupResult(BaseModel):
    """Outcome of a Cleanup run."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str
    deleted_count: int = Field(ge=0, description="Articles deleted.")
    markers_deleted: int = Field(ge=0)
    revalidated: bool = False


class GeneratorStats(BaseModel):
    """Read-only snapshot for the operator dashboard."""

    model_config = ConfigDict(frozen=True)

    total_articles: int = 0
    processed_events: int = 0
    eligible_events: int = 0
    remaining_events: int = 0
    llm_configured: bool = False
    llm_provider: str | None = None
    recent_articles: list[ArticleListing] = Field(default_factory=list)
