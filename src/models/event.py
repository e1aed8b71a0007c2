"""Source event model - the listing an article is generated from.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph - no imports from upper layers).
#
# Events are created and edited by the listing site's scrapers and admin
# dashboard.  nightsWriter only reads them, so the model is frozen and
# carries just the columns the generation pipeline uses.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class SourceEvent(BaseModel):
    """An event listing that may be turned into a blog article.

    An event is *eligible* when it is active, has an affiliate (booking
    partner) link, and has not started yet.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Event identifier (UUID string).")
    title: str = Field(description="Listing title.")
    description: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    category: str = Field(default="events", description="Listing category slug.")
    start_date: date | None = None
    end_date: date | None = None
    start_time: str | None = None
    price: str | None = None
    cover_url: str | None = None
    image_url: str | None = None
    featured_image: str | None = None
    affiliate_url: str | None = Field(
        default=None,
        description="Booking-partner link; its presence marks the event eligible.",
    )
    booking_url: str | None = None
    is_active: bool = True

    @property
    def location_text(self) -> str:
        """Venue name and address joined into one free-text location string."""
        return " ".join(part for part in (self.venue_name, self.venue_address) if part)

    @property
    def representative_image(self) -> str | None:
        """Pick the article image: cover, then generic image, then featured image."""
        return self.cover_url or self.image_url or self.featured_image or None
