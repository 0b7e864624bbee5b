from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from http import HTTPStatus

from solid_mcp.core.metadata import LDP_BASIC_CONTAINER
from solid_mcp.core.urls import normalize_url, parent_container_url
from solid_mcp.transport.response import BufferedPodResponse


@dataclass(frozen=True)
class InMemoryResource:
    url: str
    content: bytes
    content_type: str
    is_container: bool
    modified: str


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | bytes | None = None


def _now() -> str:
    return format_datetime(datetime.now(timezone.utc), usegmt=True)


def _respond(url: str, status: HTTPStatus, headers: Mapping[str, str] | None = None, content: bytes = b"") -> BufferedPodResponse:
    return BufferedPodResponse(url=url, status=status.value, status_text=status.phrase, headers=headers, content=content)


class InMemoryPod:
    """A minimal in-process Solid pod.

    Implements the ``Fetch`` protocol. Containers are URLs ending in ``/``;
    writing a resource creates any missing parent containers. Every request is
    appended to ``requests`` so tests can assert on the exchange.
    """

    def __init__(self, base_url: str = "https://pod.example/") -> None:
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.resources: dict[str, InMemoryResource] = {}
        self.requests: list[RecordedRequest] = []
        self._store_container(self.base_url)

    # -- seeding helpers -----------------------------------------------------

    def add_resource(self, path: str, content: str | bytes, content_type: str = "text/plain") -> str:
        url = normalize_url(path, self.base_url)
        self._ensure_parents(url)
        data = content.encode("utf-8") if isinstance(content, str) else content
        self.resources[url] = InMemoryResource(url, data, content_type, False, _now())
        return url

    def add_container(self, path: str) -> str:
        url = normalize_url(path, self.base_url)
        if not url.endswith("/"):
            url = f"{url}/"
        self._ensure_parents(url)
        self._store_container(url)
        return url

    def children_of(self, container_url: str) -> list[InMemoryResource]:
        return [
            res
            for url, res in sorted(self.resources.items())
            if url != container_url and parent_container_url(url) == container_url
        ]

    # -- Fetch protocol ------------------------------------------------------

    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> BufferedPodResponse:
        request_headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), body))

        if method in ("GET", "HEAD"):
            return self._get(url, include_body=method == "GET")
        if method == "PUT":
            return self._put(url, request_headers, body)
        if method == "DELETE":
            return self._delete(url)
        return _respond(url, HTTPStatus.METHOD_NOT_ALLOWED)

    # -- internals -----------------------------------------------------------

    def _store_container(self, url: str) -> None:
        if url not in self.resources:
            self.resources[url] = InMemoryResource(url, b"", "text/turtle", True, _now())

    def _ensure_parents(self, url: str) -> None:
        parent = parent_container_url(url)
        while parent.startswith(self.base_url) and parent not in self.resources:
            self._store_container(parent)
            parent = parent_container_url(parent)

    def _render_listing(self, container_url: str) -> bytes:
        lines = [
            "@prefix ldp: <http://www.w3.org/ns/ldp#>.",
            "@prefix dc: <http://purl.org/dc/terms/>.",
            "",
            f"<{container_url}> a ldp:BasicContainer, ldp:Container.",
        ]
        children = self.children_of(container_url)
        for child in children:
            lines.append(f"<{container_url}> ldp:contains <{child.url}>.")
        for child in children:
            if child.is_container:
                lines.append(f'<{child.url}> a ldp:BasicContainer, ldp:Container; dc:format "text/turtle".')
            else:
                lines.append(f'<{child.url}> a ldp:Resource; dc:format "{child.content_type}".')
        return ("\n".join(lines) + "\n").encode("utf-8")

    def _get(self, url: str, include_body: bool) -> BufferedPodResponse:
        resource = self.resources.get(url)
        if resource is None:
            return _respond(url, HTTPStatus.NOT_FOUND)
        content = self._render_listing(url) if resource.is_container else resource.content
        headers = {
            "Content-Type": resource.content_type,
            "Content-Length": str(len(content)),
            "Last-Modified": resource.modified,
        }
        return _respond(url, HTTPStatus.OK, headers, content if include_body else b"")

    def _put(self, url: str, headers: Mapping[str, str], body: str | bytes | None) -> BufferedPodResponse:
        existing = self.resources.get(url)
        wants_container = LDP_BASIC_CONTAINER in headers.get("link", "") or url.endswith("/")

        if wants_container:
            if existing is not None and not existing.is_container:
                return _respond(url, HTTPStatus.CONFLICT)
            self._ensure_parents(url)
            self._store_container(url)
            return _respond(url, HTTPStatus.RESET_CONTENT if existing else HTTPStatus.CREATED)

        if existing is not None and existing.is_container:
            return _respond(url, HTTPStatus.CONFLICT)
        if "content-type" not in headers:
            return _respond(url, HTTPStatus.BAD_REQUEST)
        data = body.encode("utf-8") if isinstance(body, str) else (body or b"")
        self._ensure_parents(url)
        self.resources[url] = InMemoryResource(url, data, headers["content-type"], False, _now())
        return _respond(url, HTTPStatus.RESET_CONTENT if existing else HTTPStatus.CREATED)

    def _delete(self, url: str) -> BufferedPodResponse:
        resource = self.resources.get(url)
        if resource is None:
            return _respond(url, HTTPStatus.NOT_FOUND)
        if url == self.base_url:
            return _respond(url, HTTPStatus.METHOD_NOT_ALLOWED)
        if resource.is_container and self.children_of(url):
            return _respond(url, HTTPStatus.CONFLICT)
        del self.resources[url]
        return _respond(url, HTTPStatus.RESET_CONTENT)
