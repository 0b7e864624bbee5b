import json
from collections.abc import Mapping
from typing import Any

import httpx

from solid_mcp.core.errors import BodyConsumedError


def _charset(content_type: str) -> str:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip('"')
    return "utf-8"


class BufferedPodResponse:
    """A fully received pod response whose body may be read exactly once.

    Implements the ``PodResponse`` protocol.
    """

    def __init__(
        self,
        url: str,
        status: int,
        status_text: str,
        headers: Mapping[str, str] | None = None,
        content: bytes = b"",
    ) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        self.headers = httpx.Headers(headers or {})
        self._content = content
        self._consumed = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def body_used(self) -> bool:
        return self._consumed

    def _take(self) -> bytes:
        if self._consumed:
            raise BodyConsumedError(self.url)
        self._consumed = True
        return self._content

    async def text(self) -> str:
        return self._take().decode(_charset(self.headers.get("Content-Type", "")), errors="replace")

    async def json(self) -> Any:
        return json.loads(self._take())

    async def read(self) -> bytes:
        return self._take()

    def __repr__(self) -> str:
        return f"BufferedPodResponse({self.status} {self.status_text!r} for {self.url})"
