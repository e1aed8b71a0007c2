"""Keyword-based city/country attribution for event listings.

Partner listings carry only free-text venue fields.  The resolver scans
``venue_name + " " + venue_address`` against the ordered keyword tables in
:mod:`src.config.locations` and returns a :class:`ResolvedLocation`.

Rules:
    - The first matching country (in table order) wins.
    - The first matching city wins; when no country keyword matched, the
      city's own country is used.
    - A city whose country disagrees with the matched country is dropped.
    - Nothing matched → ``country="unknown"``, ``city=None``.  The site's
      home country is NEVER used as a fallback.
"""

from __future__ import annotations

import re

from src.config.locations import (
    CITY_COUNTRY,
    CITY_KEYWORDS,
    COUNTRY_KEYWORDS,
    UNKNOWN_LOCATION,
    country_display_name,
)
from src.models.article import ResolvedLocation
from src.models.event import SourceEvent
from src.utils.logging import get_logger


def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile *keyword* into a case-insensitive whole-word pattern."""
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword.lower())}(?![a-z0-9])")


_COUNTRY_PATTERNS: list[tuple[str, list[re.Pattern[str]]]] = [
    (slug, [keyword_pattern(k) for k in keywords]) for slug, keywords in COUNTRY_KEYWORDS
]
_CITY_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (keyword_pattern(keyword), city) for keyword, city in CITY_KEYWORDS
]


class LocationResolver:
    """Resolves a free-text location string to a city and country."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    def resolve_event(self, event: SourceEvent) -> ResolvedLocation:
        return self.resolve(event.location_text)

    def resolve(self, text: str) -> ResolvedLocation:
        """Return the city/country attribution for *text*."""
        haystack = text.lower()
        country_slug = self.match_country(haystack)
        city = self.match_city(haystack)

        if city is not None:
            city_country = CITY_COUNTRY.get(city)
            if country_slug is None:
                country_slug = city_country
            elif city_country is not None and city_country != country_slug:
                self._logger.debug(
                    "location_city_dropped",
                    city=city,
                    city_country=city_country,
                    country=country_slug,
                )
                city = None

        if country_slug is None:
            return ResolvedLocation(city=city, country=UNKNOWN_LOCATION, country_slug=None)

        return ResolvedLocation(
            city=city,
            country=country_display_name(country_slug),
            country_slug=country_slug,
        )

    @staticmethod
    def match_country(haystack: str) -> str | None:
        """Return the slug of the first country with a keyword in *haystack*."""
        for slug, patterns in _COUNTRY_PATTERNS:
            if any(p.search(haystack) for p in patterns):
                return slug
        return None

    @staticmethod
    def match_city(haystack: str) -> str | None:
        """Return the display name of the first city keyword in *haystack*."""
        for pattern, city in _CITY_PATTERNS:
            if pattern.search(haystack):
                return city
        return None
