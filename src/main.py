"""nightsWriter FastAPI application entry point.

Wires together providers, services and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml`` and
configures structured logging.

``build_components`` is shared with the CLI (``python -m src.cli.blog``)
so both entry points run the exact same pipeline.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    http_exception_handler,
    validation_exception_handler,
)
from src.api.routes import router as api_router
from src.api.routes import trigger_router
from src.config.loader import get_recent_articles_limit, get_revalidation_paths, load_config
from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.page_revalidator import IPageRevalidator
from src.pipeline.blog_pipeline import BlogGenerationPipeline
from src.providers.llm.anthropic_provider import AnthropicLLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider
from src.providers.revalidation.http_revalidator import HttpPageRevalidator
from src.providers.revalidation.logging_revalidator import LoggingPageRevalidator
from src.providers.store.schema import initialize_database
from src.providers.store.sqlite_article_repository import SQLiteArticleRepository
from src.providers.store.sqlite_event_repository import SQLiteEventRepository
from src.providers.store.sqlite_marker_repository import SQLiteMarkerRepository
from src.services.article_writer import ArticleWriter
from src.services.location_resolver import LocationResolver
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    app_env=settings.app_env,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Select the LLM provider based on configured API keys.

    Priority order: Anthropic -> OpenAI.  With neither key set an
    unconfigured Anthropic provider is returned; its ``is_available()`` is
    ``False`` so generation runs fail fast with a ConfigurationError.
    """
    if app_settings.anthropic_api_key:
        return AnthropicLLMProvider(settings=app_settings)
    if app_settings.openai_api_key:
        return OpenAILLMProvider(settings=app_settings)
    return AnthropicLLMProvider(settings=app_settings)


def _build_revalidator(
    app_settings: Settings, http_client: httpx.AsyncClient
) -> IPageRevalidator:
    if app_settings.revalidate_url:
        return HttpPageRevalidator(
            http_client=http_client,
            url=app_settings.revalidate_url,
            secret=app_settings.revalidate_secret,
            timeout=app_settings.revalidate_timeout_seconds,
        )
    return LoggingPageRevalidator()


def build_components(
    app_settings: Settings,
    config: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    The caller owns ``http_client`` and must close it.
    """
    config = config if config is not None else load_config(settings=app_settings)

    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=app_settings.revalidate_timeout_seconds)

    # -- Generation API --
    llm = _build_llm_provider(app_settings)

    # -- Record store --
    db_path = app_settings.database_path
    event_repository = SQLiteEventRepository(db_path)
    article_repository = SQLiteArticleRepository(db_path)
    marker_repository = SQLiteMarkerRepository(db_path)

    # -- Page cache --
    revalidator = _build_revalidator(app_settings, http_client)

    # -- Services --
    writer = ArticleWriter(
        llm_provider=llm,
        site_name=app_settings.site_name,
        home_country=app_settings.home_country,
    )
    pipeline = BlogGenerationPipeline(
        llm_provider=llm,
        article_writer=writer,
        location_resolver=LocationResolver(),
        event_repository=event_repository,
        article_repository=article_repository,
        marker_repository=marker_repository,
        page_revalidator=revalidator,
        revalidation_paths=get_revalidation_paths(config),
        recent_articles_limit=get_recent_articles_limit(config),
        delay_seconds=app_settings.generation_delay_seconds,
    )

    provider_registry: dict[str, Any] = {
        "llm": llm.is_available(),
        "llm_provider": llm.get_provider_name(),
        "store": article_repository.get_provider_name(),
        "revalidator": revalidator.get_provider_name(),
    }

    return {
        "settings": app_settings,
        "config": config,
        "http_client": http_client,
        "llm_provider": llm,
        "event_repository": event_repository,
        "article_repository": article_repository,
        "marker_repository": marker_repository,
        "page_revalidator": revalidator,
        "pipeline": pipeline,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings, components: dict[str, Any] | None):
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise the store and all components on startup, clean up on shutdown."""
        built = components if components is not None else build_components(app_settings)
        for key, value in built.items():
            setattr(application.state, key, value)

        await initialize_database(built["settings"].database_path)

        _logger.info(
            "app_startup",
            version=_VERSION,
            environment=built["settings"].app_env,
            providers=built.get("provider_registry", {}),
        )

        yield

        http_client: httpx.AsyncClient | None = built.get("http_client")
        if http_client is not None:
            await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    ``components`` replaces :func:`build_components` (used by tests to
    inject fakes); it must contain at least ``settings`` and ``pipeline``.
    """
    app_settings = app_settings or settings
    application = FastAPI(
        title="nightsWriter API",
        version=_VERSION,
        description=(
            "Turns upcoming, bookable event listings into published blog "
            "articles, once per event, and invalidates the site's cached pages."
        ),
        lifespan=_make_lifespan(app_settings, components),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    # -- Error envelopes for 401/404/422 --
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # -- API routes --
    application.include_router(trigger_router)
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
