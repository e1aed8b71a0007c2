"""Shared-secret check for the blog trigger endpoints.

The trigger URL is opened from a bookmarked link or a cron job, so the
secret travels as a ``?secret=`` query parameter.  Comparison is
constant-time.  An empty configured secret means the endpoints are
disabled: every request is rejected.
"""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request

from src.config.settings import Settings


def is_authorized(provided: str | None, expected: str) -> bool:
    """Return ``True`` when *provided* exactly matches a non-empty *expected*."""
    if not expected or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_secret(
    request: Request,
    secret: Annotated[str | None, Query()] = None,
) -> None:
    """FastAPI dependency: 401 unless ``?secret=`` matches the configured one."""
    if not is_authorized(secret, _get_settings(request).blog_generation_secret):
        raise HTTPException(status_code=401, detail="Unauthorized")


SecretDep = Annotated[None, Depends(require_secret)]
