"""No-op revalidator used when no ``REVALIDATE_URL`` is configured.

Local development and the CLI have no page cache to invalidate; the
paths are logged so the operator can see what would have been rebuilt.
"""

from __future__ import annotations

from src.interfaces.page_revalidator import IPageRevalidator
from src.utils.logging import get_logger


class LoggingPageRevalidator(IPageRevalidator):

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    async def revalidate(self, paths: list[str]) -> None:
        self._logger.info("pages_revalidation_skipped", paths=paths, reason="no_revalidate_url")

    def get_provider_name(self) -> str:
        return "logging_revalidator"
