"""Shared fixtures and helpers for tests."""

from collections.abc import Mapping
from pathlib import Path

import pytest

from solid_mcp.config import PodConfig
from solid_mcp.core.actions import ActionDispatcher
from solid_mcp.core.resolver import ResourceResolver
from solid_mcp.transport import BufferedPodResponse, InMemoryPod, RecordedRequest

_REPO_ROOT = Path(__file__).parent.parent

POD_URL = "https://pod.example/"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# ScriptedFetch: a Fetch that replays queued responses
# ---------------------------------------------------------------------------


class ScriptedFetch:
    """Replay queued responses (or raise queued exceptions) in order.

    Every call is recorded in ``requests``.
    """

    def __init__(self, *outcomes: BufferedPodResponse | Exception) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[RecordedRequest] = []

    async def __call__(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
    ) -> BufferedPodResponse:
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), body))
        if not self.outcomes:
            raise AssertionError(f"Unexpected {method} {url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_response(
    status: int = 200,
    body: str | bytes = b"",
    content_type: str | None = None,
    status_text: str = "OK",
    url: str = POD_URL,
    headers: Mapping[str, str] | None = None,
) -> BufferedPodResponse:
    content = body.encode("utf-8") if isinstance(body, str) else body
    all_headers = dict(headers or {})
    if content_type is not None:
        all_headers["Content-Type"] = content_type
    return BufferedPodResponse(url=url, status=status, status_text=status_text, headers=all_headers, content=content)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pod_config() -> PodConfig:
    return PodConfig(pod_url=POD_URL)


@pytest.fixture
def pod() -> InMemoryPod:
    return InMemoryPod(POD_URL)


@pytest.fixture
def resolver(pod_config: PodConfig, pod: InMemoryPod) -> ResourceResolver:
    return ResourceResolver(pod_config, pod)


@pytest.fixture
def dispatcher(resolver: ResourceResolver) -> ActionDispatcher:
    return ActionDispatcher(resolver)
