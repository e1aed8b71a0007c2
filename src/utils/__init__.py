"""Utility modules for nightsWriter.

- **errors** -- Domain exception hierarchy rooted at NightsWriterError;
  request-level errors abort a generation run, per-event errors are
  isolated by the pipeline.
- **logging** -- structlog setup with a dual renderer: coloured console
  output in development, structured JSON in production.
- **text** -- slug normalisation, HTML stripping and read-time estimates
  for generated articles.
"""

from src.utils.errors import (
    ArticleGenerationError,
    ConfigurationError,
    DuplicateMarkerError,
    EventFetchError,
    LLMError,
    LocationMismatchError,
    NightsWriterError,
    PersistenceError,
    RevalidationError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text import estimate_read_time, slugify, strip_html

__all__ = [
    "ArticleGenerationError",
    "ConfigurationError",
    "DuplicateMarkerError",
    "EventFetchError",
    "LLMError",
    "LocationMismatchError",
    "NightsWriterError",
    "PersistenceError",
    "RevalidationError",
    "configure_logging",
    "estimate_read_time",
    "get_logger",
    "slugify",
    "strip_html",
]
