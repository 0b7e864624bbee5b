"""FastMCP server exposing solid-mcp actions."""

from __future__ import annotations

import base64
import json
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError

from solid_mcp.core.actions import SERVICE_DESCRIPTION, SERVICE_NAME, ActionDispatcher


def _jsonable(value: Any) -> Any:
    """Replace binary payloads with base64 strings so results serialize as JSON."""
    if isinstance(value, bytes):
        return {"encoding": "base64", "data": base64.b64encode(value).decode("ascii")}
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def create_mcp_server(dispatcher: ActionDispatcher) -> FastMCP:
    """Create a FastMCP server wired to the given dispatcher."""

    mcp = FastMCP(SERVICE_NAME, instructions=SERVICE_DESCRIPTION)

    async def _call(action: str, **parameters: Any) -> dict[str, Any]:
        response = await dispatcher.handle({"action": action, "parameters": parameters})
        if response["status"] == "error":
            raise ToolError(response["error"])
        return _jsonable(response["result"])  # type: ignore[no-any-return]

    @mcp.tool()
    async def read_resource(uri: str, include_content: bool = True) -> dict[str, Any]:
        """Read a resource from a Solid pod."""
        return await _call("read_resource", uri=uri, include_content=include_content)

    @mcp.tool()
    async def write_resource(uri: str, content: Any, content_type: str) -> dict[str, Any]:
        """Create or update a resource in a Solid pod."""
        return await _call("write_resource", uri=uri, content=content, content_type=content_type)

    @mcp.tool()
    async def delete_resource(uri: str) -> dict[str, Any]:
        """Delete a resource from a Solid pod."""
        return await _call("delete_resource", uri=uri)

    @mcp.tool()
    async def list_container(uri: str) -> dict[str, Any]:
        """List the contents of a container in a Solid pod."""
        return await _call("list_container", uri=uri)

    @mcp.tool()
    async def create_container(uri: str) -> dict[str, Any]:
        """Create a container in a Solid pod."""
        return await _call("create_container", uri=uri)

    @mcp.tool()
    async def search(container_uri: str, search_term: str, recursive: bool = False) -> dict[str, Any]:
        """Search for resources in a Solid pod by filename."""
        return await _call("search", container_uri=container_uri, search_term=search_term, recursive=recursive)

    @mcp.resource("solid://{path*}")
    async def pod_resource(path: str) -> str | bytes:
        """Read a pod path relative to the configured pod URL."""
        response = await dispatcher.handle(
            {"action": "read_resource", "parameters": {"uri": f"/{path}", "include_content": True}}
        )
        if response["status"] == "error":
            raise ResourceError(response["error"])
        content = response["result"].get("content", "")
        if isinstance(content, (str, bytes)):
            return content
        return json.dumps(content)

    return mcp
