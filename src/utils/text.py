"""Text helpers for generated articles.

1. **Slugs** -- lowercase, URL-safe, dash-separated identifiers.  Model
   output is never trusted to already be URL-safe.
2. **HTML stripping** -- article bodies arrive as HTML fragments
   (``<h2>``, ``<p>``, ``<ul>``); word counts must ignore the markup.
3. **Read time** -- minutes at a fixed reading speed, never below one.
"""

import math
import re

_WORDS_PER_MINUTE = 200

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]")
_REPEATED_DASHES = re.compile(r"-+")
_HTML_TAG = re.compile(r"<[^>]+>")
_HTML_ENTITY = re.compile(r"&[a-zA-Z#0-9]+;")


def slugify(value: str) -> str:
    """Return a URL-safe slug for *value*.

    Any character outside ``[a-z0-9-]`` becomes a dash, runs of dashes
    collapse to one and leading/trailing dashes are trimmed, so
    ``"Riyadh Season: Live!"`` becomes ``"riyadh-season-live"``.

    Args:
        value: Arbitrary text (a title or a model-suggested slug).

    Returns:
        The normalised slug; empty when *value* has no slug-safe characters.
    """
    slug = _NON_SLUG_CHARS.sub("-", value.strip().lower())
    slug = _REPEATED_DASHES.sub("-", slug)
    return slug.strip("-")


def strip_html(html: str) -> str:
    """Remove tags and entities from an HTML fragment and collapse whitespace."""
    text = _HTML_TAG.sub(" ", html)
    text = _HTML_ENTITY.sub(" ", text)
    return re.sub(r"\s+", " ", text).strip()


def estimate_read_time(html: str) -> int:
    """Estimate reading time in whole minutes for an HTML article body.

    Args:
        html: The article body.

    Returns:
        ``ceil(words / 200)``, with a floor of 1 minute.
    """
    words = len(strip_html(html).split())
    return max(1, math.ceil(words / _WORDS_PER_MINUTE))
