"""Blog article models - generation brief, model draft, and stored article.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models.
#
# Three shapes of the same content, one per pipeline step:
#
#   ArticleBrief      - what we SEND to the generation API (event facts
#                       plus the locally resolved city/country).
#   ArticleDraft      - what the generation API RETURNS (parsed JSON).
#   GeneratedArticle  - what we STORE (draft + attribution + bookkeeping).
#
# ProcessedMarker links an event to the article generated from it.  At
# most one marker exists per event; that is the only thing preventing an
# event from being written up twice.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ArticleStatus(str, Enum):
    """Publication state of a stored article."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ArticleType(str, Enum):
    """What kind of listing an article was generated from."""

    EVENT = "event"


class ResolvedLocation(BaseModel):
    """City/country attribution extracted from an event's venue fields.

    ``country`` is a display name ("Saudi Arabia") or the ``"unknown"``
    sentinel.  ``city`` is ``None`` when no city keyword matched.
    """

    model_config = ConfigDict(frozen=True)

    city: str | None = None
    country: str = "unknown"
    country_slug: str | None = Field(
        default=None,
        description="Slug form of the country ('saudi-arabia'); None when unknown.",
    )

    @property
    def city_or_unknown(self) -> str:
        return self.city or "unknown"


class ArticleBrief(BaseModel):
    """Payload handed to the article writer for one event."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    title: str
    description: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    location: str = Field(default="", description="Venue name + address, free text.")
    city: str = Field(description="Resolved city or 'unknown'.")
    country: str = Field(description="Resolved country display name or 'unknown'.")
    country_slug: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    category: str = "events"
    price: str | None = None
    image_url: str | None = None
    cover_url: str | None = None
    affiliate_url: str | None = None
    booking_url: str | None = None


class ArticleDraft(BaseModel):
    """Article fields as returned by the generation API."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    slug: str = ""
    excerpt: str = ""
    content: str = Field(min_length=1)
    meta_title: str = ""
    meta_description: str = ""
    keywords: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    read_time_minutes: int | None = None

    @field_validator("keywords", "tags", mode="before")
    @classmethod
    def _coerce_string_list(cls, value: object) -> object:
        # Models occasionally return "a, b, c" instead of a JSON array.
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class GeneratedArticle(BaseModel):
    """A published blog article, as stored."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str
    excerpt: str = ""
    content: str
    meta_title: str = ""
    meta_description: str = ""
    keywords: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    read_time_minutes: int = Field(default=1, ge=1)
    country: str = "unknown"
    city: str | None = None
    category: str = "events"
    event_id: str | None = None
    featured_image: str | None = None
    article_type: ArticleType = ArticleType.EVENT
    status: ArticleStatus = ArticleStatus.PUBLISHED
    created_at: datetime
    updated_at: datetime


class ProcessedMarker(BaseModel):
    """Tracking row: this event has already been turned into this article."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    article_id: str
    created_at: datetime


class ArticleListing(BaseModel):
    """Minimal article view for dashboards (title, slug, creation time)."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str
    created_at: datetime
