from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from solid_mcp.transport.response import BufferedPodResponse

logger = logging.getLogger(__name__)


class HttpxFetch:
    """Send pod requests over HTTP with an ``httpx.AsyncClient``.

    Implements the ``Fetch`` protocol. Timeouts, redirects and retries are
    whatever the client is configured with; when no client is given one is
    created and owned by this instance.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, **client_options: Any) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(**client_options)

    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> BufferedPodResponse:
        response = await self._client.request(method, url, headers=dict(headers or {}), content=body)
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return BufferedPodResponse(
            url=url,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            content=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxFetch:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
