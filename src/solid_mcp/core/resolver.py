import json
import logging
from collections.abc import Mapping
from typing import Any

from solid_mcp.config import PodConfig
from solid_mcp.core.auth import build_request_headers
from solid_mcp.core.errors import (
    ContainerCreateError,
    DeleteError,
    PodTransportError,
    ReadError,
    SolidMcpError,
    WriteError,
)
from solid_mcp.core.metadata import LDP_BASIC_CONTAINER, extract_children, is_container
from solid_mcp.core.ports.transport import Fetch, PodResponse
from solid_mcp.core.urls import normalize_url
from solid_mcp.models import Permissions, ReadResult, ResourceDescriptor, ResourceKind

logger = logging.getLogger(__name__)

JSON_TYPE = "application/json"
TURTLE_TYPE = "text/turtle"


def _is_json_type(content_type: str) -> bool:
    media = content_type.split(";", 1)[0].strip().lower()
    return media in (JSON_TYPE, "application/ld+json") or media.endswith("+json")


def _is_text_type(content_type: str) -> bool:
    return content_type.split(";", 1)[0].strip().lower().startswith("text/")


def _is_turtle_type(content_type: str) -> bool:
    return TURTLE_TYPE in content_type.lower()


def _parse_size(value: str | None) -> int | None:
    if value is None or not value.strip().isdigit():
        return None
    return int(value)


class ResourceResolver:
    """Read, write, delete and create resources on a single pod.

    Relative locators are resolved against ``config.pod_url`` once, on entry
    to each public method. All network I/O goes through the injected ``fetch``.
    """

    def __init__(self, config: PodConfig, fetch: Fetch) -> None:
        self._config = config
        self._fetch = fetch

    @property
    def pod_url(self) -> str:
        return self._config.pod_url

    def normalize(self, uri: str) -> str:
        return normalize_url(uri, self._config.pod_url)

    async def _send(
        self,
        url: str,
        method: str,
        extra_headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> PodResponse:
        headers = build_request_headers(self._config.auth)
        headers.update(extra_headers or {})
        logger.debug("%s %s", method, url)
        try:
            return await self._fetch(url, method=method, headers=headers, body=body)
        except SolidMcpError:
            raise
        except Exception as exc:
            raise PodTransportError(url, method, exc) from exc

    async def _permissions(self, url: str) -> Permissions | None:
        # Static grant until WAC-Allow headers are parsed.
        try:
            return Permissions(read=True, write=True, append=True, control=False)
        except Exception:
            logger.exception("Could not determine permissions for %s", url)
            return None

    async def _decode(self, response: PodResponse, content_type: str) -> Any:
        if _is_json_type(content_type):
            return await response.json()
        if _is_text_type(content_type):
            return await response.text()
        return await response.read()

    async def _list_children(self, container_url: str) -> list[ResourceDescriptor]:
        response = await self._send(container_url, "GET")
        if not response.ok:
            raise ReadError(container_url, response.status, response.status_text)
        return extract_children(await response.text(), container_url)

    async def read(self, uri: str, include_content: bool = True) -> ReadResult:
        url = self.normalize(uri)
        response = await self._send(url, "GET")
        if not response.ok:
            raise ReadError(url, response.status, response.status_text)

        content_type = response.headers.get("Content-Type") or ""
        turtle_text: str | None = None
        container = False
        if _is_turtle_type(content_type):
            turtle_text = await response.text()
            container = is_container(turtle_text)

        descriptor = ResourceDescriptor(
            uri=url,
            kind=ResourceKind.CONTAINER if container else ResourceKind.RESOURCE,
            content_type=content_type or None,
            modified=response.headers.get("Last-Modified") or None,
            size=_parse_size(response.headers.get("Content-Length")),
            permissions=await self._permissions(url),
        )

        fields: dict[str, Any] = {"resource": descriptor}
        if include_content:
            fields["content"] = turtle_text if turtle_text is not None else await self._decode(response, content_type)
        if container:
            fields["children"] = await self._list_children(url)
        return ReadResult(**fields)

    async def write(self, uri: str, content: Any, content_type: str) -> ReadResult:
        url = self.normalize(uri)
        body: str | bytes
        if isinstance(content, (str, bytes)):
            body = content
        elif isinstance(content, (bytearray, memoryview)):
            body = bytes(content)
        else:
            body = json.dumps(content)
            content_type = JSON_TYPE

        response = await self._send(url, "PUT", {"Content-Type": content_type}, body)
        if not response.ok:
            raise WriteError(url, response.status, response.status_text)
        logger.info("Wrote %s (%s)", url, content_type)
        return await self.read(url)

    async def delete(self, uri: str) -> bool:
        url = self.normalize(uri)
        response = await self._send(url, "DELETE")
        if not response.ok:
            raise DeleteError(url, response.status, response.status_text)
        logger.info("Deleted %s", url)
        return True

    async def create_container(self, uri: str) -> ReadResult:
        url = self.normalize(uri)
        headers = {"Link": f'<{LDP_BASIC_CONTAINER}>; rel="type"', "Content-Type": TURTLE_TYPE}
        response = await self._send(url, "PUT", headers)
        if not response.ok:
            raise ContainerCreateError(url, response.status, response.status_text)
        logger.info("Created container %s", url)
        return await self.read(url)
