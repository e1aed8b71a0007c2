"""SQLite record store: events (read-only), articles and processed markers."""

from src.providers.store.schema import initialize_database
from src.providers.store.sqlite_article_repository import SQLiteArticleRepository
from src.providers.store.sqlite_event_repository import SQLiteEventRepository
from src.providers.store.sqlite_marker_repository import SQLiteMarkerRepository

__all__ = [
    "SQLiteArticleRepository",
    "SQLiteEventRepository",
    "SQLiteMarkerRepository",
    "initialize_database",
]
