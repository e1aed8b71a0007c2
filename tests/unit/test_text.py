"""Unit tests for slug, HTML-stripping and read-time helpers."""

from __future__ import annotations

import pytest

from src.utils.text import estimate_read_time, slugify, strip_html


class TestSlugify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Riyadh Season: Live!", "riyadh-season-live"),
            ("  already-a-slug  ", "already-a-slug"),
            ("Dubai --- Comedy___Night", "dubai-comedy-night"),
            ("-leading and trailing-", "leading-and-trailing"),
            ("Café Olé", "caf-ol"),
        ],
    )
    def test_normalises(self, value: str, expected: str) -> None:
        assert slugify(value) == expected

    def test_no_safe_characters_gives_empty(self) -> None:
        assert slugify("!!! ???") == ""


class TestStripHtml:
    def test_removes_tags_and_entities(self) -> None:
        html = "<h2>Title</h2><p>Hello&nbsp;<strong>world</strong></p>"
        assert strip_html(html) == "Title Hello world"


class TestEstimateReadTime:
    def test_minimum_is_one_minute(self) -> None:
        assert estimate_read_time("") == 1
        assert estimate_read_time("<p>short</p>") == 1

    def test_rounds_up_at_200_words_per_minute(self) -> None:
        assert estimate_read_time("<p>" + "word " * 200 + "</p>") == 1
        assert estimate_read_time("<p>" + "word " * 201 + "</p>") == 2
        assert estimate_read_time("word " * 600) == 3

    def test_markup_is_not_counted(self) -> None:
        body = "".join(f"<li><strong>w{i}</strong></li>" for i in range(200))
        assert estimate_read_time(body) == 1
