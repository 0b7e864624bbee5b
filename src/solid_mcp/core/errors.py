"""Exceptions raised by the pod client and the action dispatcher.

Everything derives from ``SolidMcpError`` so callers (the dispatcher, the CLI)
can catch the whole family with one clause. The dispatcher reduces any of them
to ``str(exc)`` in its error envelope, so messages are written to stand alone.
"""

from __future__ import annotations


class SolidMcpError(Exception):
    """Base class for all solid-mcp errors."""


class ConfigError(SolidMcpError):
    """Raised when the pod configuration is missing or invalid."""


class InvalidRequestError(SolidMcpError):
    """Raised when an action request envelope is malformed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid request: {reason}")


class InvalidParametersError(SolidMcpError):
    """Raised when an action's parameters fail validation.

    Attributes:
        action: The action whose parameters were rejected.
        problems: One human-readable entry per offending field.
    """

    def __init__(self, action: str, problems: list[str]) -> None:
        self.action = action
        self.problems = problems
        super().__init__(f"Invalid parameters for {action}: {'; '.join(problems)}")


class UnknownActionError(SolidMcpError):
    """Raised when an action name is not in the registry."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Unknown action: {action}")


class PodRequestError(SolidMcpError):
    """Base class for requests the pod answered with a non-2xx status.

    Attributes:
        locator: The absolute URL the request targeted.
        status: Numeric HTTP status returned by the pod.
        status_text: Reason phrase returned by the pod.
    """

    verb = "access"

    def __init__(self, locator: str, status: int, status_text: str) -> None:
        self.locator = locator
        self.status = status
        self.status_text = status_text
        super().__init__(f"Failed to {self.verb} {locator}: {status} {status_text}".rstrip())


class ReadError(PodRequestError):
    verb = "read resource"


class WriteError(PodRequestError):
    verb = "write resource"


class DeleteError(PodRequestError):
    verb = "delete resource"


class ContainerCreateError(PodRequestError):
    verb = "create container"


class PodTransportError(SolidMcpError):
    """Raised when the transport itself could not complete a request.

    Attributes:
        locator: The absolute URL the request targeted.
        method: HTTP method of the failed request.
        cause: The exception raised by the transport.
    """

    def __init__(self, locator: str, method: str, cause: BaseException) -> None:
        self.locator = locator
        self.method = method
        self.cause = cause
        super().__init__(f"Transport error during {method} {locator}: {cause}")


class BodyConsumedError(SolidMcpError):
    """Raised when a response body is read a second time."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Response body for {url} has already been read")
