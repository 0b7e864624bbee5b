from collections.abc import Mapping
from typing import Any, Protocol


class PodResponse(Protocol):
    @property
    def ok(self) -> bool: ...

    @property
    def status(self) -> int: ...

    @property
    def status_text(self) -> str: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    async def text(self) -> str: ...

    async def json(self) -> Any: ...

    async def read(self) -> bytes: ...


class Fetch(Protocol):
    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> PodResponse: ...
