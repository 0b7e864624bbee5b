"""Fixtures that drive the pod over a real httpx client stack."""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from solid_mcp.config import AuthConfig, PodConfig
from solid_mcp.core.actions import ActionDispatcher
from solid_mcp.core.resolver import ResourceResolver
from solid_mcp.transport import HttpxFetch, InMemoryPod

POD_URL = "https://pod.example/"


def pod_transport(pod: InMemoryPod) -> httpx.MockTransport:
    """Serve ``pod`` behind an httpx transport so requests go through the client."""

    async def handler(request: httpx.Request) -> httpx.Response:
        response = await pod(
            str(request.url),
            method=request.method,
            headers=dict(request.headers),
            body=await request.aread() or None,
        )
        return httpx.Response(
            response.status,
            headers=dict(response.headers),
            content=await response.read(),
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def served_pod() -> InMemoryPod:
    return InMemoryPod(POD_URL)


@pytest_asyncio.fixture
async def http_fetch(served_pod: InMemoryPod) -> AsyncGenerator[HttpxFetch, None]:
    async with HttpxFetch(transport=pod_transport(served_pod)) as fetch:
        yield fetch


@pytest.fixture
def http_dispatcher(http_fetch: HttpxFetch) -> ActionDispatcher:
    config = PodConfig(pod_url=POD_URL, auth=AuthConfig(type="bearer", token="s3cret"))
    return ActionDispatcher(ResourceResolver(config, http_fetch))


@pytest_asyncio.fixture
async def pod_client(served_pod: InMemoryPod) -> AsyncGenerator[httpx.AsyncClient, None]:
    client = httpx.AsyncClient(transport=pod_transport(served_pod))
    yield client
    await client.aclose()
