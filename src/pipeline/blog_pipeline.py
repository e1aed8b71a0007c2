"""Content generation pipeline: events in, published blog articles out.

Coordinates the location resolver, the article writer, the record store
and the page-cache hook into three operator-facing operations:

    - generate(batch_size) → write articles for the next eligible events
    - cleanup()            → delete every article and marker
    - get_stats()          → read-only counts for the dashboard

ARCHITECTURE NOTE:
    Events are processed strictly one after another, soonest start date
    first.  Each event runs inside its own error boundary: a failed model
    call, an unusable draft or a failed insert is recorded in the run's
    error list and the loop moves on.  Only request-level problems (no
    generation credential, unreadable store) abort the run.

    Exactly-once publishing rests on the store: the article and its
    processed marker are written in one transaction and the marker's
    event id is unique.  If another invocation published the same event
    first, the insert fails with DuplicateMarkerError and the event is
    counted as ``skipped``.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from src.interfaces.article_repository import IArticleRepository
from src.interfaces.event_repository import IEventRepository
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.marker_repository import IMarkerRepository
from src.interfaces.page_revalidator import IPageRevalidator
from src.models.article import ArticleStatus, ArticleType, GeneratedArticle
from src.models.event import SourceEvent
from src.models.pipeline import (
    CleanupResult,
    FailedEvent,
    GenerationResult,
    GeneratorStats,
    PublishedArticle,
)
from src.services.article_writer import ArticleWriter
from src.services.location_resolver import LocationResolver
from src.utils.errors import ConfigurationError, DuplicateMarkerError, RevalidationError
from src.utils.logging import get_logger
from src.utils.text import estimate_read_time

NO_EVENTS_MESSAGE = "No new events to blog"


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class BlogGenerationPipeline:
    """Turns eligible events into published articles, once per event.

    All collaborators are injected at construction time.  ``clock`` and
    ``id_factory`` exist so tests can pin "today" and article ids.
    """

    def __init__(
        self,
        llm_provider: ILLMProvider,
        article_writer: ArticleWriter,
        location_resolver: LocationResolver,
        event_repository: IEventRepository,
        article_repository: IArticleRepository,
        marker_repository: IMarkerRepository,
        page_revalidator: IPageRevalidator,
        revalidation_paths: list[str],
        recent_articles_limit: int = 5,
        delay_seconds: float = 0.0,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._llm = llm_provider
        self._writer = article_writer
        self._resolver = location_resolver
        self._events = event_repository
        self._articles = article_repository
        self._markers = marker_repository
        self._revalidator = page_revalidator
        self._revalidation_paths = list(revalidation_paths)
        self._recent_limit = recent_articles_limit
        self._delay_seconds = delay_seconds
        self._clock = clock
        self._id_factory = id_factory
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    async def generate(self, batch_size: int = 1) -> GenerationResult:
        """Generate and publish articles for up to *batch_size* events.

        Raises
        ------
        ConfigurationError
            If no generation-API credential is configured.
        EventFetchError
            If the exclusion set or the eligible events cannot be read.
        """
        if not self._llm.is_available():
            raise ConfigurationError(
                message="Generation API key not configured",
                provider_name=self._llm.get_provider_name(),
            )

        today = self._clock().date()
        processed_ids = await self._markers.processed_event_ids()
        events = await self._events.list_eligible(
            today=today, limit=batch_size, exclude_ids=processed_ids
        )

        if not events:
            self._logger.info("no_events_to_blog", excluded=len(processed_ids))
            return GenerationResult(message=NO_EVENTS_MESSAGE)

        run_id = uuid.uuid4().hex[:12]
        published: list[PublishedArticle] = []
        errors: list[FailedEvent] = []
        skipped = 0

        with structlog.contextvars.bound_contextvars(run_id=run_id):
            self._logger.info("generation_run_started", batch_size=batch_size, selected=len(events))

            for index, event in enumerate(events):
                if index and self._delay_seconds > 0:
                    await asyncio.sleep(self._delay_seconds)

                try:
                    article = await self._generate_article(event)
                    await self._articles.publish(article)
                except DuplicateMarkerError:
                    skipped += 1
                    self._logger.info("event_already_processed", event_id=event.id)
                    continue
                except Exception as exc:
                    error = str(exc) or type(exc).__name__
                    errors.append(
                        FailedEvent(event_id=event.id, event_title=event.title, error=error)
                    )
                    self._logger.warning(
                        "event_generation_failed",
                        event_id=event.id,
                        error=error,
                        error_type=type(exc).__name__,
                    )
                    continue

                published.append(
                    PublishedArticle(
                        event_id=event.id,
                        event_title=event.title,
                        article_id=article.id,
                        article_title=article.title,
                        slug=article.slug,
                    )
                )
                self._logger.info(
                    "article_generated",
                    event_id=event.id,
                    article_id=article.id,
                    slug=article.slug,
                    country=article.country,
                    city=article.city,
                )

            revalidated = await self._revalidate() if published else False

            self._logger.info(
                "generation_run_finished",
                processed=len(published),
                failed=len(errors),
                skipped=skipped,
                revalidated=revalidated,
            )

        return GenerationResult(
            message=f"Generated {len(published)} blog posts",
            processed=len(published),
            failed=len(errors),
            skipped=skipped,
            revalidated=revalidated,
            articles=published,
            errors=errors,
        )

    async def _generate_article(self, event: SourceEvent) -> GeneratedArticle:
        location = self._resolver.resolve_event(event)
        brief = self._writer.build_brief(event, location)
        draft = await self._writer.write(brief)

        now = self._clock()
        return GeneratedArticle(
            id=self._id_factory(),
            title=draft.title,
            slug=draft.slug,
            excerpt=draft.excerpt,
            content=draft.content,
            meta_title=draft.meta_title or draft.title,
            meta_description=draft.meta_description or draft.excerpt,
            keywords=draft.keywords,
            tags=draft.tags,
            read_time_minutes=estimate_read_time(draft.content),
            country=location.country,
            city=location.city,
            category=event.category,
            event_id=event.id,
            featured_image=event.representative_image,
            article_type=ArticleType.EVENT,
            status=ArticleStatus.PUBLISHED,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    async def cleanup(self) -> CleanupResult:
        """Delete every marker and article, then invalidate listing pages."""
        # Markers reference articles, so they go first.
        markers_deleted = await self._markers.delete_all()
        deleted_count = await self._articles.delete_all()
        revalidated = await self._revalidate()

        self._logger.info(
            "blog_cleanup_finished",
            deleted_count=deleted_count,
            markers_deleted=markers_deleted,
            revalidated=revalidated,
        )
        return CleanupResult(
            message=f"Deleted {deleted_count} articles and {markers_deleted} tracker entries",
            deleted_count=deleted_count,
            markers_deleted=markers_deleted,
            revalidated=revalidated,
        )

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    async def get_stats(self) -> GeneratorStats:
        """Return read-only counts and the most recent articles."""
        today = self._clock().date()
        total_articles = await self._articles.count()
        processed_events = await self._markers.count()
        eligible_events = await self._events.count_eligible(today)
        recent = await self._articles.list_recent(self._recent_limit)

        return GeneratorStats(
            total_articles=total_articles,
            processed_events=processed_events,
            eligible_events=eligible_events,
            remaining_events=max(0, eligible_events - processed_events),
            llm_configured=self._llm.is_available(),
            llm_provider=self._llm.get_provider_name() if self._llm.is_available() else None,
            recent_articles=recent,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _revalidate(self) -> bool:
        try:
            await self._revalidator.revalidate(self._revalidation_paths)
        except RevalidationError as exc:
            self._logger.warning("pages_revalidation_failed", error=str(exc))
            return False
        return True
