"""Public interface definitions for all external collaborators.

The generation pipeline reaches the generation API, the record store and
the page cache exclusively through the abstract base classes defined in
this package.  Concrete adapters implement these interfaces and are
injected at startup by ``src/main.py`` (or the CLI), so unit tests can pass
fakes without touching a real API or database.

CONCRETE PROVIDER MAP:
    Interface            →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    ILLMProvider         →  AnthropicLLMProvider, OpenAILLMProvider
    IEventRepository     →  SQLiteEventRepository
    IArticleRepository   →  SQLiteArticleRepository
    IMarkerRepository    →  SQLiteMarkerRepository
    IPageRevalidator     →  HttpPageRevalidator, LoggingPageRevalidator
"""

from src.interfaces.article_repository import IArticleRepository
from src.interfaces.event_repository import IEventRepository
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.marker_repository import IMarkerRepository
from src.interfaces.page_revalidator import IPageRevalidator

__all__ = [
    "IArticleRepository",
    "IEventRepository",
    "ILLMProvider",
    "IMarkerRepository",
    "IPageRevalidator",
]
