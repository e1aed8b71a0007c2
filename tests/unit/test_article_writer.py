"""Unit tests for ArticleWriter - prompt, parsing, location check, slugs."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.llm_provider import ILLMProvider
from src.models.article import ArticleBrief, ArticleDraft, ResolvedLocation
from src.services.article_writer import ArticleWriter
from src.services.location_resolver import LocationResolver
from src.utils.errors import ArticleGenerationError, LLMError, LocationMismatchError
from tests.conftest import article_json


def _llm(response: str) -> MagicMock:
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value=response)
    llm.get_provider_name.return_value = "mock_llm"
    llm.is_available.return_value = True
    return llm


@pytest.fixture
def riyadh_brief(make_event) -> ArticleBrief:
    event = make_event(id="0f8fad5b-d9cb-469f-a165-70867728950e")
    return ArticleWriter.build_brief(event, LocationResolver().resolve_event(event))


@pytest.fixture
def unknown_brief(make_event) -> ArticleBrief:
    event = make_event(id="evt-unknown", venue_name="The Terrace", venue_address=None)
    return ArticleWriter.build_brief(event, LocationResolver().resolve_event(event))


class TestBuildBrief:
    def test_carries_resolved_location(self, riyadh_brief: ArticleBrief) -> None:
        assert riyadh_brief.city == "Riyadh"
        assert riyadh_brief.country == "Saudi Arabia"
        assert riyadh_brief.country_slug == "saudi-arabia"
        assert riyadh_brief.location == "Boulevard City Riyadh, Saudi Arabia"
        assert riyadh_brief.affiliate_url == "https://tickets.example.com/riyadh"

    def test_unknown_location_is_explicit(self, unknown_brief: ArticleBrief) -> None:
        assert unknown_brief.city == "unknown"
        assert unknown_brief.country == "unknown"
        assert unknown_brief.country_slug is None


class TestPrompts:
    def test_user_prompt_pins_city_and_country(self, riyadh_brief: ArticleBrief) -> None:
        prompt = ArticleWriter.build_user_prompt(riyadh_brief)
        assert "City: Riyadh" in prompt
        assert "Country: Saudi Arabia" in prompt
        assert "Use exactly this city: Riyadh" in prompt
        assert "2027-03-01" in prompt
        assert "https://tickets.example.com/riyadh" in prompt

    def test_user_prompt_unknown_location(self, unknown_brief: ArticleBrief) -> None:
        prompt = ArticleWriter.build_user_prompt(unknown_brief)
        assert "City: unknown" in prompt
        assert "Country: unknown" in prompt
        assert "Address not specified" in prompt

    def test_system_prompt_names_site_and_home(self) -> None:
        writer = ArticleWriter(_llm("{}"), site_name="GulfNights", home_country="bahrain")
        prompt = writer.build_system_prompt()
        assert "GulfNights" in prompt
        assert "Do not say the event is in Bahrain" in prompt


class TestWrite:
    @pytest.mark.asyncio
    async def test_returns_draft_with_suffixed_slug(self, riyadh_brief: ArticleBrief) -> None:
        llm = _llm(article_json())
        draft = await ArticleWriter(llm).write(riyadh_brief)

        assert draft.title == "Riyadh Season Concert at Boulevard City"
        assert draft.slug == "riyadh-season-concert-riyadh-0f8fad5b"
        assert draft.keywords == ["riyadh events", "concerts", "things to do in riyadh"]
        llm.complete.assert_awaited_once()
        assert llm.complete.await_args.kwargs["temperature"] == 0.4

    @pytest.mark.asyncio
    async def test_accepts_code_fenced_json(self, riyadh_brief: ArticleBrief) -> None:
        fenced = f"```json\n{article_json()}\n```"
        draft = await ArticleWriter(_llm(fenced)).write(riyadh_brief)
        assert draft.title.startswith("Riyadh Season")

    @pytest.mark.asyncio
    async def test_accepts_preamble_prose(self, riyadh_brief: ArticleBrief) -> None:
        response = f"Here is the article you asked for:\n{article_json()}\nEnjoy!"
        draft = await ArticleWriter(_llm(response)).write(riyadh_brief)
        assert draft.content.startswith("<h2>")

    @pytest.mark.asyncio
    async def test_comma_separated_keywords_are_split(self, riyadh_brief: ArticleBrief) -> None:
        response = article_json(keywords="riyadh, concerts , ", tags="Riyadh,Saudi Arabia")
        draft = await ArticleWriter(_llm(response)).write(riyadh_brief)
        assert draft.keywords == ["riyadh", "concerts"]
        assert draft.tags == ["Riyadh", "Saudi Arabia"]

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, riyadh_brief: ArticleBrief) -> None:
        with pytest.raises(ArticleGenerationError, match="Could not parse"):
            await ArticleWriter(_llm("{not: valid json")).write(riyadh_brief)

    @pytest.mark.asyncio
    async def test_no_object_raises(self, riyadh_brief: ArticleBrief) -> None:
        with pytest.raises(ArticleGenerationError):
            await ArticleWriter(_llm("I cannot help with that.")).write(riyadh_brief)

    @pytest.mark.asyncio
    async def test_json_array_raises(self, riyadh_brief: ArticleBrief) -> None:
        with pytest.raises(ArticleGenerationError):
            await ArticleWriter(_llm(json.dumps([1, 2, 3]))).write(riyadh_brief)

    @pytest.mark.asyncio
    async def test_missing_content_raises(self, riyadh_brief: ArticleBrief) -> None:
        with pytest.raises(ArticleGenerationError):
            await ArticleWriter(_llm(json.dumps({"title": "Only a title"}))).write(riyadh_brief)

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, riyadh_brief: ArticleBrief) -> None:
        llm = _llm("")
        llm.complete.side_effect = LLMError(message="timeout", provider_name="mock_llm")
        with pytest.raises(LLMError):
            await ArticleWriter(llm).write(riyadh_brief)


class TestLocationCheck:
    @pytest.mark.asyncio
    async def test_home_country_mention_for_foreign_event_raises(
        self, riyadh_brief: ArticleBrief
    ) -> None:
        response = article_json(content="<p>Head to Manama for a night to remember.</p>")
        with pytest.raises(LocationMismatchError, match="Location mismatch") as exc_info:
            await ArticleWriter(_llm(response)).write(riyadh_brief)
        assert "Riyadh, Saudi Arabia" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_home_country_in_title_raises(self, riyadh_brief: ArticleBrief) -> None:
        response = article_json(title="Best Bahrain Concert This Spring")
        with pytest.raises(LocationMismatchError):
            await ArticleWriter(_llm(response)).write(riyadh_brief)

    @pytest.mark.asyncio
    async def test_unknown_location_is_also_checked(self, unknown_brief: ArticleBrief) -> None:
        response = article_json(content="<p>The best rooftop in Bahrain.</p>")
        with pytest.raises(LocationMismatchError):
            await ArticleWriter(_llm(response)).write(unknown_brief)

    @pytest.mark.asyncio
    async def test_home_event_may_mention_home(self, make_event) -> None:
        event = make_event(id="evt-bh", venue_name="Bahrain International Circuit",
                           venue_address="Sakhir")
        brief = ArticleWriter.build_brief(event, LocationResolver().resolve_event(event))
        response = article_json(title="Grand Prix Weekend in Sakhir, Bahrain",
                                content="<p>Race day in Bahrain.</p>")
        draft = await ArticleWriter(_llm(response)).write(brief)
        assert draft.slug.endswith("-evt-bh")

    def test_substring_is_not_a_mention(self, riyadh_brief: ArticleBrief) -> None:
        writer = ArticleWriter(_llm("{}"))
        draft = ArticleWriter._parse_llm_response(
            article_json(content="<p>Grab a seat at the Seefood Shack in Riyadh.</p>")
        )

        writer.check_location(ArticleDraft.model_validate(draft), riyadh_brief)


class TestNormalizeSlug:
    def test_suffix_is_first_eight_id_chars(self) -> None:
        slug = ArticleWriter.normalize_slug("Riyadh Concert!", "ignored", "0f8fad5b-d9cb")
        assert slug == "riyadh-concert-0f8fad5b"

    def test_empty_slug_falls_back_to_title(self) -> None:
        assert ArticleWriter.normalize_slug("!!!", "Doha Jazz Night", "abc") == "doha-jazz-night-abc"

    def test_nothing_usable_falls_back_to_event(self) -> None:
        assert ArticleWriter.normalize_slug("", "???", "12345678abc") == "event-12345678"

    def test_same_raw_slug_differs_per_event(self) -> None:
        first = ArticleWriter.normalize_slug("live-concert", "t", "aaaaaaaa-1")
        second = ArticleWriter.normalize_slug("live-concert", "t", "bbbbbbbb-2")
        assert first != second


class TestResolvedLocation:
    def test_city_or_unknown(self) -> None:
        assert ResolvedLocation(city=None).city_or_unknown == "unknown"
        assert ResolvedLocation(city="Doha", country="Qatar").city_or_unknown == "Doha"
