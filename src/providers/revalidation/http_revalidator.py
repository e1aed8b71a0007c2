"""HTTP page-cache invalidation hook.

POSTs the list of paths to the site's revalidation endpoint
(``REVALIDATE_URL``) as ``{"paths": [...]}``, with the shared secret in
the ``x-revalidate-secret`` header.  The site rebuilds each page (or every
page of a route pattern such as ``/blog/[slug]``) on its next request.

Follows the same adapter pattern as the other providers: an injected
``httpx.AsyncClient`` so tests can pass ``httpx.MockTransport``.
"""

from __future__ import annotations

import httpx

from src.interfaces.page_revalidator import IPageRevalidator
from src.utils.errors import RevalidationError
from src.utils.logging import get_logger

_SECRET_HEADER = "x-revalidate-secret"


class HttpPageRevalidator(IPageRevalidator):
    """Revalidates cached pages through the site's webhook.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    url:
        Absolute URL of the revalidation endpoint.
    secret:
        Shared secret sent with every request; omitted when empty.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        secret: str = "",
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._url = url
        self._secret = secret
        self._timeout = timeout
        self._logger = get_logger(__name__)

    async def revalidate(self, paths: list[str]) -> None:
        headers = {_SECRET_HEADER: self._secret} if self._secret else {}
        try:
            response = await self._http.post(
                self._url,
                json={"paths": paths},
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RevalidationError(
                message=f"Revalidation endpoint returned {exc.response.status_code}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise RevalidationError(
                message=f"Revalidation request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.info("pages_revalidated", paths=paths, url=self._url)

    def get_provider_name(self) -> str:
        return "http_revalidator"
