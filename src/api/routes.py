"""FastAPI routes for the nightsWriter blog generator.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                                  Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/blog/trigger?secret=                 GET     HTML status dashboard
# /api/blog/trigger?secret=&action=cleanup  GET     Delete all articles (JSON)
# /api/blog/trigger?secret=&action=generate GET     Run one batch (JSON)
# /api/v1/blog/generate?secret=             POST    Run one batch (JSON body)
# /api/v1/blog/cleanup?secret=              POST    Delete all articles (JSON)
# /api/v1/blog/stats?secret=                GET     Generator statistics
# /api/v1/health                            GET     Health check + providers
#
# Dependencies are read from ``app.state`` (populated at startup in
# main.py's build_components) through small helper functions, so tests can
# build an app with fake components.
#
# Request-level failures (missing generation key, unreadable store) are
# raised as NightsWriterError and converted to 500 JSON by
# ErrorHandlingMiddleware.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from src.api.auth import SecretDep, is_authorized
from src.api.dashboard import render_dashboard, render_unauthorized
from src.api.schemas import GenerateRequest, HealthResponse, generation_payload
from src.config.settings import Settings
from src.models.pipeline import CleanupResult, GeneratorStats
from src.pipeline.blog_pipeline import BlogGenerationPipeline
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_VERSION = "0.1.0"

# /api/v1/... JSON endpoints.
router = APIRouter(prefix="/api/v1")

# The browser-facing trigger keeps its unversioned path.
trigger_router = APIRouter(prefix="/api/blog")


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_pipeline(request: Request) -> BlogGenerationPipeline:
    """Return the blog pipeline from application state."""
    return request.app.state.pipeline


def _get_settings(request: Request) -> Settings:
    """Return the application settings from application state."""
    return request.app.state.settings


PipelineDep = Annotated[BlogGenerationPipeline, Depends(_get_pipeline)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


# ---------------------------------------------------------------------------
# Trigger (browser + bookmark / cron)
# ---------------------------------------------------------------------------


@trigger_router.get("/trigger", response_model=None, summary="Blog generator trigger")
async def blog_trigger(
    pipeline: PipelineDep,
    settings: SettingsDep,
    secret: Annotated[str | None, Query()] = None,
    action: Annotated[str | None, Query()] = None,
    batch_size: Annotated[int | None, Query()] = None,
) -> Response:
    """Show the status page or run ``action=cleanup`` / ``action=generate``.

    Any other ``action`` value renders the status page.
    """
    if not is_authorized(secret, settings.blog_generation_secret):
        _logger.warning("blog_trigger_unauthorized", action=action)
        if action in ("cleanup", "generate"):
            return JSONResponse(
                status_code=401, content={"success": False, "error": "Unauthorized"}
            )
        return HTMLResponse(render_unauthorized(settings.site_name), status_code=401)

    if action == "cleanup":
        result = await pipeline.cleanup()
        return JSONResponse(result.model_dump(mode="json"))

    if action == "generate":
        size = settings.clamp_batch_size(batch_size)
        generation = await pipeline.generate(batch_size=size)
        return JSONResponse(generation_payload(generation))

    stats = await pipeline.get_stats()
    return HTMLResponse(render_dashboard(stats, settings.site_name))


# ---------------------------------------------------------------------------
# JSON API
# ---------------------------------------------------------------------------


@router.post("/blog/generate", summary="Generate articles for the next eligible events")
async def generate_articles(
    _auth: SecretDep,
    pipeline: PipelineDep,
    settings: SettingsDep,
    body: Annotated[GenerateRequest | None, Body()] = None,
) -> dict[str, Any]:
    """Run one generation batch; ``batch_size`` is clamped to the configured max."""
    size = settings.clamp_batch_size(body.batch_size if body else None)
    result = await pipeline.generate(batch_size=size)
    return generation_payload(result)


@router.post(
    "/blog/cleanup",
    response_model=CleanupResult,
    summary="Delete every generated article and marker",
)
async def cleanup_articles(_auth: SecretDep, pipeline: PipelineDep) -> CleanupResult:
    return await pipeline.cleanup()


@router.get("/blog/stats", response_model=GeneratorStats, summary="Generator statistics")
async def generator_stats(_auth: SecretDep, pipeline: PipelineDep) -> GeneratorStats:
    return await pipeline.get_stats()


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, Any] = {}
    if hasattr(request.app.state, "provider_registry"):
        providers = dict(request.app.state.provider_registry)

    status = "healthy" if providers.get("llm", False) else "degraded"
    return HealthResponse(status=status, version=_VERSION, providers=providers)
