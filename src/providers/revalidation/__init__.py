"""Page-cache invalidation adapters (IPageRevalidator)."""

from src.providers.revalidation.http_revalidator import HttpPageRevalidator
from src.providers.revalidation.logging_revalidator import LoggingPageRevalidator

__all__ = ["HttpPageRevalidator", "LoggingPageRevalidator"]
