import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from solid_mcp.core.errors import ConfigError

AuthType = Literal["bearer", "dpop", "cookie"]


class AuthConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AuthType
    token: str | None = None
    refresh_token: str | None = None


class PodConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    pod_url: str
    auth: AuthConfig | None = None


def load_config(
    pod_url: str | None = None,
    auth_type: str | None = None,
    token: str | None = None,
) -> PodConfig:
    """Build a ``PodConfig`` from explicit values, falling back to the environment.

    Reads ``SOLID_POD_URL``, ``SOLID_AUTH_TYPE``, ``SOLID_TOKEN`` and
    ``SOLID_REFRESH_TOKEN``.
    """
    url = pod_url or os.getenv("SOLID_POD_URL")
    if not url:
        raise ConfigError("No pod URL configured; pass --pod-url or set SOLID_POD_URL")

    kind = auth_type or os.getenv("SOLID_AUTH_TYPE")
    secret = token or os.getenv("SOLID_TOKEN")
    try:
        auth = (
            AuthConfig(type=kind, token=secret, refresh_token=os.getenv("SOLID_REFRESH_TOKEN"))  # type: ignore[arg-type]
            if kind
            else None
        )
    except ValidationError as exc:
        raise ConfigError(f"Unsupported auth type {kind!r}; expected bearer, dpop or cookie") from exc
    return PodConfig(pod_url=url, auth=auth)
