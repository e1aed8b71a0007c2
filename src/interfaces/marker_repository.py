"""Abstract base class for processed-event markers.

A marker records that an event has already been turned into an article.
Markers are created by :meth:`IArticleRepository.publish` in the same
transaction as their article, so this interface only reads and clears them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.article import ProcessedMarker


# Concrete implementation: SQLiteMarkerRepository (src/providers/store/)
class IMarkerRepository(ABC):

    @abstractmethod
    async def processed_event_ids(self) -> set[str]:
        """Return the ids of every event that already has a marker.

        Raises EventFetchError when the store cannot be read.
        """

    @abstractmethod
    async def get(self, event_id: str) -> ProcessedMarker | None:
        """Return the marker for *event_id*, or ``None``."""

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every marker and return how many rows were removed."""

    @abstractmethod
    async def count(self) -> int:
        """Return the total number of markers."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this repository."""
