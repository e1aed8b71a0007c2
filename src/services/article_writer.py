"""LLM-backed article writer for event listings.

Turns an :class:`ArticleBrief` into a validated :class:`ArticleDraft`:

1. Render a strict, facts-only prompt from the brief.
2. Call the injected :class:`ILLMProvider` once.
3. Parse the JSON object out of the response (code fences and preamble
   prose are tolerated).
4. Reject drafts that place a foreign event in the site's home country.
5. Normalise the slug and make it unique per event.

Architecture: LLM-as-Writer with a Location Safety Net
-------------------------------------------------------
The prompt pins the model to the resolved city and country, but models
still drift toward the site's home market ("... in the heart of Manama").
The writer therefore re-checks the generated title and body against the
home country's location tokens and raises :class:`LocationMismatchError`
instead of returning a wrong article.  The pipeline records that as a
per-event failure, so the event stays eligible for the next run.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError

from src.config.locations import COUNTRY_MENTION_TOKENS, UNKNOWN_LOCATION, country_display_name
from src.interfaces.llm_provider import ILLMProvider
from src.models.article import ArticleBrief, ArticleDraft, ResolvedLocation
from src.models.event import SourceEvent
from src.services.location_resolver import keyword_pattern
from src.utils.errors import ArticleGenerationError, LocationMismatchError
from src.utils.logging import get_logger
from src.utils.text import slugify

# Matches markdown code fences (```json ... ``` or ``` ... ```) that LLMs
# frequently wrap around JSON output despite being asked not to.
_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)

_SLUG_SUFFIX_LENGTH = 8


class ArticleWriter:
    """Writes one blog article per event through an LLM provider.

    Parameters
    ----------
    llm_provider:
        The generation API backend.
    site_name:
        Brand name used in the system prompt (e.g. ``"BahrainNights"``).
    home_country:
        Slug of the site's home market; events are never placed there
        unless their own location data says so.
    temperature:
        Sampling temperature for the completion call.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider,
        site_name: str = "BahrainNights",
        home_country: str = "bahrain",
        temperature: float = 0.4,
    ) -> None:
        self._llm = llm_provider
        self._site_name = site_name
        self._home_country = home_country.lower()
        self._temperature = temperature
        self._home_patterns = [
            keyword_pattern(token)
            for token in COUNTRY_MENTION_TOKENS.get(self._home_country, (self._home_country,))
        ]
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def build_brief(event: SourceEvent, location: ResolvedLocation) -> ArticleBrief:
        """Assemble the generation payload for *event*.

        Missing city/country are passed as the explicit ``"unknown"``
        sentinel so the model is never left to guess.
        """
        return ArticleBrief(
            event_id=event.id,
            title=event.title,
            description=event.description,
            venue_name=event.venue_name,
            venue_address=event.venue_address,
            location=event.location_text,
            city=location.city_or_unknown,
            country=location.country,
            country_slug=location.country_slug,
            start_date=event.start_date,
            end_date=event.end_date,
            start_time=event.start_time,
            category=event.category,
            price=event.price,
            image_url=event.image_url,
            cover_url=event.cover_url,
            affiliate_url=event.affiliate_url,
            booking_url=event.booking_url,
        )

    async def write(self, brief: ArticleBrief) -> ArticleDraft:
        """Generate, validate and normalise an article for *brief*.

        Raises
        ------
        LLMError
            If the provider call fails.
        ArticleGenerationError
            If the response holds no usable JSON article.
        LocationMismatchError
            If the article mentions the home country for a foreign event.
        """
        response = await self._llm.complete(
            system_prompt=self.build_system_prompt(),
            user_prompt=self.build_user_prompt(brief),
            temperature=self._temperature,
        )

        try:
            draft = ArticleDraft.model_validate(self._parse_llm_response(response))
        except (json.JSONDecodeError, ValueError, ValidationError) as exc:
            raise ArticleGenerationError(
                message=f"Could not parse article JSON from model response: {exc}",
                provider_name=self._llm.get_provider_name(),
            ) from exc

        self.check_location(draft, brief)

        slug = self.normalize_slug(draft.slug, draft.title, brief.event_id)
        self._logger.info(
            "article_drafted",
            event_id=brief.event_id,
            slug=slug,
            city=brief.city,
            country=brief.country,
        )
        return draft.model_copy(update={"slug": slug})

    def check_location(self, draft: ArticleDraft, brief: ArticleBrief) -> None:
        """Raise :class:`LocationMismatchError` for home-country drift.

        Applies only when the event itself is not in the home country.
        """
        if brief.country_slug == self._home_country:
            return

        text = f"{draft.title}\n{draft.content}".lower()
        if any(pattern.search(text) for pattern in self._home_patterns):
            home = country_display_name(self._home_country)
            self._logger.warning(
                "article_location_mismatch",
                event_id=brief.event_id,
                city=brief.city,
                country=brief.country,
                home_country=home,
            )
            raise LocationMismatchError(
                message=(
                    f"Location mismatch: article mentions {home} for event in "
                    f"{brief.city}, {brief.country}"
                ),
            )

    @staticmethod
    def normalize_slug(raw_slug: str, title: str, event_id: str) -> str:
        """Return a URL-safe slug suffixed with the event id prefix.

        Falls back to the title when the model's slug has no usable
        characters.
        """
        base = slugify(raw_slug) or slugify(title) or "event"
        return f"{base}-{event_id[:_SLUG_SUFFIX_LENGTH]}"

    # ------------------------------------------------------------------
    # Prompt construction
    # ------------------------------------------------------------------

    def build_system_prompt(self) -> str:
        home = country_display_name(self._home_country)
        return (
            f"You are a content writer for {self._site_name}, an events platform "
            "covering the Middle East and beyond.\n"
            "\n"
            "STRICT RULES:\n"
            "1. Use ONLY the event data you are given. Do not make up any facts.\n"
            "2. Mention the venue, city and country EXACTLY as provided.\n"
            f"3. Do not say the event is in {home} unless the data says so.\n"
            "4. Do not research or add information about performers, teams or artists.\n"
            "5. Do not invent histories, backgrounds or venue atmospheres.\n"
            "6. If information is missing, write generally without inventing specifics.\n"
            "7. Keep the tone engaging but factually accurate.\n"
            "\n"
            "Respond with a single JSON object and nothing else."
        )

    @staticmethod
    def build_user_prompt(brief: ArticleBrief) -> str:
        city = brief.city
        country = brief.country
        dates = brief.start_date.isoformat() if brief.start_date else "Date to be announced"
        if brief.end_date and brief.end_date != brief.start_date:
            dates = f"{dates} to {brief.end_date.isoformat()}"

        city_hint = city if city != UNKNOWN_LOCATION else "the event location"
        city_slug = slugify(city) if city != UNKNOWN_LOCATION else "event"

        return (
            "EVENT DATA (use only this information):\n"
            f"Title: {brief.title}\n"
            f"Venue: {brief.venue_name or 'Venue to be announced'}\n"
            f"Venue Address: {brief.venue_address or 'Address not specified'}\n"
            f"City: {city}\n"
            f"Country: {country}\n"
            f"Date: {dates}\n"
            f"Time: {brief.start_time or 'Time to be announced'}\n"
            f"Category: {brief.category or 'Event'}\n"
            f"Price: {brief.price or 'Check website for pricing'}\n"
            f"Tickets: {brief.affiliate_url or brief.booking_url or 'Not provided'}\n"
            f"Event Description: {brief.description or 'No description available'}\n"
            "\n"
            "WRITING INSTRUCTIONS:\n"
            "1. Write a 400-600 word blog post about this event.\n"
            "2. Open with an engaging hook about the TYPE of event, not invented facts.\n"
            f"3. Use exactly this city: {city}. Use exactly this country: {country}.\n"
            "4. Mention the date and time exactly as provided.\n"
            "5. End with a call-to-action to get tickets.\n"
            "6. Format the body as HTML using <h2>, <p>, <strong>, <ul>, <li>.\n"
            "\n"
            "Return JSON with these keys:\n"
            "{\n"
            f'  "title": "Event title mentioning {city_hint} (50-60 chars)",\n'
            f'  "slug": "url-friendly-slug-with-{city_slug}",\n'
            f'  "excerpt": "2 sentence summary mentioning {city_hint}",\n'
            '  "content": "HTML article body",\n'
            '  "meta_title": "SEO title (50-60 chars)",\n'
            '  "meta_description": "SEO description (150-160 chars)",\n'
            '  "keywords": ["keyword1", "keyword2", "keyword3"],\n'
            f'  "tags": ["{city}", "{country}", "{brief.category or "Events"}"],\n'
            '  "read_time_minutes": 3\n'
            "}"
        )

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_llm_response(response: str) -> dict[str, Any]:
        """Extract the JSON object from an LLM response string.

        Raises
        ------
        json.JSONDecodeError
            If no valid JSON can be extracted.
        ValueError
            If the JSON is not an object.
        """
        text = response.strip()

        fence_match = _JSON_FENCE_RE.search(text)
        if fence_match:
            text = fence_match.group(1).strip()

        # Preamble prose before the object: take the outermost brace pair.
        if not text.startswith("{"):
            brace_start = text.find("{")
            brace_end = text.rfind("}")
            if brace_start == -1 or brace_end <= brace_start:
                raise ValueError("No JSON object found in model response")
            text = text[brace_start : brace_end + 1]

        parsed = json.loads(text)
        if not isinstance(parsed, dict):
            raise ValueError("Model response is not a JSON object")
        return parsed
