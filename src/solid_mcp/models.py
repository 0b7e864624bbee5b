from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    CONTAINER = "container"
    RESOURCE = "resource"


class Permissions(BaseModel):
    model_config = ConfigDict(frozen=True)

    read: bool
    write: bool
    append: bool
    control: bool


class ResourceDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uri: str
    kind: ResourceKind = Field(default=ResourceKind.RESOURCE, alias="type")
    content_type: str | None = Field(default=None, alias="contentType")
    modified: str | None = None
    size: int | None = Field(default=None, ge=0)
    permissions: Permissions | None = None

    @property
    def is_container(self) -> bool:
        return self.kind is ResourceKind.CONTAINER

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire names, leaving out unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SearchHit(ResourceDescriptor):
    relevance: float = 0.8


class ReadResult(BaseModel):
    """Outcome of reading one locator.

    ``content`` is only part of the payload when it was explicitly set, so a
    JSON ``null`` body stays distinguishable from "content not requested".
    """

    model_config = ConfigDict(frozen=True)

    resource: ResourceDescriptor
    content: Any = None
    children: list[ResourceDescriptor] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"resource": self.resource.to_payload()}
        if "content" in self.model_fields_set:
            payload["content"] = self.content
        if self.children is not None:
            payload["children"] = [child.to_payload() for child in self.children]
        return payload
