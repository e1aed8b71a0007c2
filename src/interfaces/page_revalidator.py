"""Abstract base class for the site's page-cache invalidation hook."""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: HttpPageRevalidator, LoggingPageRevalidator
# Located in: src/providers/revalidation/
class IPageRevalidator(ABC):
    """Tells the site to rebuild cached pages after articles change."""

    @abstractmethod
    async def revalidate(self, paths: list[str]) -> None:
        """Invalidate every page in *paths*.

        Paths may be route patterns (``/blog/[slug]``) meaning every page
        rendered from that route.

        Raises
        ------
        src.utils.errors.RevalidationError
            If the hook cannot be reached or rejects the request.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this revalidator."""
