"""Pydantic request/response schemas for the nightsWriter API.

The generation, cleanup and stats responses reuse the pipeline result
models from :mod:`src.models.pipeline` directly; this module only adds the
request bodies and the envelope types that exist purely for HTTP.

Convention: Request schemas end with "Request", response schemas end
with "Response".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.pipeline import GenerationResult


class GenerateRequest(BaseModel):
    """Body of ``POST /api/v1/blog/generate``.

    ``batch_size`` is clamped to the configured maximum; omitted means
    the configured default.
    """

    batch_size: int | None = Field(default=None, ge=1)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    success: bool = False
    error: str
    detail: str | None = None


def generation_payload(result: GenerationResult) -> dict[str, Any]:
    """Serialise *result* for JSON, leaving ``errors`` out when empty."""
    exclude = {"errors"} if not result.errors else set()
    return result.model_dump(mode="json", exclude=exclude)
