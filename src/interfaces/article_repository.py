"""Abstract base class for generated-article persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.article import ArticleListing, GeneratedArticle


# Concrete implementation: SQLiteArticleRepository (src/providers/store/)
class IArticleRepository(ABC):
    """Storage for published blog articles.

    :meth:`publish` writes the article together with its processed marker
    so that either both rows exist or neither does.
    """

    @abstractmethod
    async def publish(self, article: GeneratedArticle) -> None:
        """Insert *article* and the marker for ``article.event_id`` atomically.

        Raises
        ------
        src.utils.errors.DuplicateMarkerError
            If a marker for the event already exists.  Nothing is written.
        src.utils.errors.PersistenceError
            For any other write failure (e.g. a slug collision).  Nothing
            is written.
        """

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every article and return how many rows were removed."""

    @abstractmethod
    async def count(self) -> int:
        """Return the total number of stored articles."""

    @abstractmethod
    async def list_recent(self, limit: int = 5) -> list[ArticleListing]:
        """Return the *limit* most recently created articles, newest first."""

    @abstractmethod
    async def get_by_slug(self, slug: str) -> GeneratedArticle | None:
        """Return the article with *slug*, or ``None``."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this repository."""
