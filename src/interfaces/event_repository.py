"""Abstract base class for reading source events from the record store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import date

from src.models.event import SourceEvent


# Concrete implementation: SQLiteEventRepository (src/providers/store/)
class IEventRepository(ABC):
    """Read-only access to event listings.

    Events are owned by the listing site; the generation pipeline never
    writes them.
    """

    @abstractmethod
    async def list_eligible(
        self,
        today: date,
        limit: int,
        exclude_ids: Collection[str] = (),
    ) -> list[SourceEvent]:
        """Return up to *limit* eligible events, soonest first.

        Eligible means active, with a non-empty affiliate link and a start
        date on or after *today*.  Events whose id is in *exclude_ids* are
        skipped; an empty collection applies no exclusion filter.

        Raises
        ------
        src.utils.errors.EventFetchError
            If the store cannot be queried.
        """

    @abstractmethod
    async def count_eligible(self, today: date) -> int:
        """Return how many events are currently eligible (processed or not)."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this repository."""
