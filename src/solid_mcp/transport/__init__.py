from solid_mcp.transport.httpx_transport import HttpxFetch
from solid_mcp.transport.memory import InMemoryPod, InMemoryResource, RecordedRequest
from solid_mcp.transport.response import BufferedPodResponse

__all__ = [
    "BufferedPodResponse",
    "HttpxFetch",
    "InMemoryPod",
    "InMemoryResource",
    "RecordedRequest",
]
