"""Custom exception hierarchy for nightsWriter.

All application exceptions inherit from :class:`NightsWriterError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "anthropic", "sqlite_articles", "http_revalidator")
caused the failure.

The hierarchy is organized by pipeline stage:

    NightsWriterError  (base -- catch-all for any nightsWriter error)
    +-- ConfigurationError       (missing credential / invalid config)
    +-- EventFetchError          (reading eligible events from the store)
    +-- LLMError                 (any generation API call failure)
    +-- ArticleGenerationError   (unparseable or unusable model output)
    |   +-- LocationMismatchError  (article places the event in the wrong country)
    +-- PersistenceError         (article / marker write failure)
    |   +-- DuplicateMarkerError   (event already processed by another run)
    +-- RevalidationError        (page-cache invalidation hook failure)

Request-level errors (configuration, fetch) abort a whole generation run;
the per-event errors (LLM, generation, persistence) are isolated by the
pipeline so one event never aborts its siblings.
"""


class NightsWriterError(Exception):
    """Base exception for all nightsWriter errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[anthropic] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request-level errors
# ---------------------------------------------------------------------------

class ConfigurationError(NightsWriterError):
    """Raised when configuration is invalid or a required credential is missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EventFetchError(NightsWriterError):
    """Raised when eligible events cannot be read from the record store."""

    def __init__(
        self,
        message: str = "Failed to fetch events from database",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Per-event generation errors
# ---------------------------------------------------------------------------

class LLMError(NightsWriterError):
    """Raised when an LLM API call fails or returns an empty response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ArticleGenerationError(NightsWriterError):
    """Raised when the model output cannot be turned into an article."""

    def __init__(
        self,
        message: str = "Article generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LocationMismatchError(ArticleGenerationError):
    """Raised when a generated article mentions a location the event is not in.

    The writer rejects such drafts instead of publishing an article that
    places a foreign event in the site's home country.
    """

    def __init__(
        self,
        message: str = "Article mentions the wrong location",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------

class PersistenceError(NightsWriterError):
    """Raised when an article or marker cannot be written."""

    def __init__(
        self,
        message: str = "Failed to save article",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DuplicateMarkerError(PersistenceError):
    """Raised when a processed marker already exists for the event.

    Another invocation published an article for the same event first.
    The transaction that raised this error has been rolled back, so no
    second article exists.
    """

    def __init__(
        self,
        message: str = "Event has already been processed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Cache invalidation
# ---------------------------------------------------------------------------

class RevalidationError(NightsWriterError):
    """Raised when the page-cache invalidation hook fails."""

    def __init__(
        self,
        message: str = "Page revalidation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
