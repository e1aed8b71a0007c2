"""nightsWriter domain models - re-exports all public model classes.

The models are organized across three submodules:
    - event.py     - the source event listing (read-only input)
    - article.py   - generation brief, model draft, stored article, marker
    - pipeline.py  - generation / cleanup / stats results
"""

from __future__ import annotations

from src.models.article import (
    ArticleBrief,
    ArticleDraft,
    ArticleListing,
    ArticleStatus,
    ArticleType,
    GeneratedArticle,
    ProcessedMarker,
    ResolvedLocation,
)
from src.models.event import SourceEvent
from src.models.pipeline import (
    CleanupResult,
    FailedEvent,
    GenerationResult,
    GeneratorStats,
    PublishedArticle,
)

__all__ = [
    "ArticleBrief",
    "ArticleDraft",
    "ArticleListing",
    "ArticleStatus",
    "ArticleType",
    "CleanupResult",
    "FailedEvent",
    "GeneratedArticle",
    "GenerationResult",
    "GeneratorStats",
    "ProcessedMarker",
    "PublishedArticle",
    "ResolvedLocation",
    "SourceEvent",
]
