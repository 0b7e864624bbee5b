"""Named-action dispatch over a pod.

Each action is a pydantic parameter record registered under its name in
``ACTIONS``. ``ActionDispatcher.handle`` validates the envelope, builds the
record, and dispatches on its type; every outcome is returned as a
``{"status": ...}`` envelope.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from solid_mcp.core.errors import InvalidParametersError, InvalidRequestError, UnknownActionError
from solid_mcp.core.resolver import ResourceResolver
from solid_mcp.core.search import search_resources

logger = logging.getLogger(__name__)

SERVICE_NAME = "solid-mcp"
SERVICE_VERSION = "1.0.0"
SERVICE_DESCRIPTION = "Model Context Protocol integration for Solid pods"


class ActionParams(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ReadResourceParams(ActionParams):
    """Read a resource from a Solid pod."""

    uri: str = Field(description="URI of the resource to read")
    include_content: bool = Field(default=True, description="Whether to include the content of the resource")


class WriteResourceParams(ActionParams):
    """Create or update a resource in a Solid pod."""

    uri: str = Field(description="URI of the resource to write")
    content: Any = Field(description="Content to write (string, bytes, or JSON-serializable value)")
    content_type: str = Field(description="Content type of the resource")


class DeleteResourceParams(ActionParams):
    """Delete a resource from a Solid pod."""

    uri: str = Field(description="URI of the resource to delete")


class ListContainerParams(ActionParams):
    """List the contents of a container in a Solid pod."""

    uri: str = Field(description="URI of the container to list")


class CreateContainerParams(ActionParams):
    """Create a container in a Solid pod."""

    uri: str = Field(description="URI of the container to create")


class SearchParams(ActionParams):
    """Search for resources in a Solid pod by filename."""

    container_uri: str = Field(description="URI of the container to search in")
    search_term: str = Field(description="Term to search for")
    recursive: bool = Field(default=False, description="Whether to search recursively")


ACTIONS: Mapping[str, type[ActionParams]] = MappingProxyType(
    {
        "read_resource": ReadResourceParams,
        "write_resource": WriteResourceParams,
        "delete_resource": DeleteResourceParams,
        "list_container": ListContainerParams,
        "create_container": CreateContainerParams,
        "search": SearchParams,
    }
)


def _describe_problems(exc: ValidationError) -> list[str]:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "parameters"
        problems.append(f"{location}: {error['msg']}")
    return problems


def parse_request(request: Any) -> ActionParams:
    """Validate an ``{"action", "parameters"}`` envelope into a parameter record."""
    if not isinstance(request, Mapping):
        raise InvalidRequestError("request must be an object")
    action = request.get("action")
    if not isinstance(action, str) or not action:
        raise InvalidRequestError("missing or invalid action")
    parameters = request.get("parameters")
    if not isinstance(parameters, Mapping):
        raise InvalidRequestError("missing or invalid parameters")

    params_model = ACTIONS.get(action)
    if params_model is None:
        raise UnknownActionError(action)
    try:
        return params_model.model_validate(dict(parameters))
    except ValidationError as exc:
        raise InvalidParametersError(action, _describe_problems(exc)) from exc


class ActionDispatcher:
    """Route action requests to the resolver or the search engine."""

    def __init__(self, resolver: ResourceResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> ResourceResolver:
        return self._resolver

    async def execute(self, params: ActionParams) -> dict[str, Any]:
        resolver = self._resolver
        match params:
            case ReadResourceParams(uri=uri, include_content=include_content):
                return (await resolver.read(uri, include_content)).to_payload()
            case WriteResourceParams(uri=uri, content=content, content_type=content_type):
                return (await resolver.write(uri, content, content_type)).to_payload()
            case DeleteResourceParams(uri=uri):
                return {"success": await resolver.delete(uri)}
            case ListContainerParams(uri=uri):
                listing = (await resolver.read(uri, include_content=False)).to_payload()
                return {"container": listing["resource"], "children": listing.get("children", [])}
            case CreateContainerParams(uri=uri):
                created = await resolver.create_container(uri)
                return {"container": created.resource.to_payload()}
            case SearchParams(container_uri=container_uri, search_term=search_term, recursive=recursive):
                hits = await search_resources(resolver, container_uri, search_term, recursive)
                return {"results": [hit.to_payload() for hit in hits]}
        raise TypeError(f"Unsupported action parameters: {type(params).__name__}")

    async def handle(self, request: Any) -> dict[str, Any]:
        """Run one action request and wrap the outcome in a status envelope."""
        try:
            params = parse_request(request)
            logger.info("Dispatching %s", request["action"])
            result = await self.execute(params)
        except Exception as exc:
            logger.warning("Action request failed: %s", exc)
            return {"status": "error", "error": str(exc)}
        return {"status": "success", "result": result}

    def describe(self) -> dict[str, Any]:
        return {
            "metadata": {
                "name": SERVICE_NAME,
                "description": SERVICE_DESCRIPTION,
                "version": SERVICE_VERSION,
                "capabilities": list(ACTIONS),
            },
            "tools": [
                {
                    "name": name,
                    "description": (model.__doc__ or "").strip(),
                    "input_schema": model.model_json_schema(),
                }
                for name, model in ACTIONS.items()
            ],
        }
