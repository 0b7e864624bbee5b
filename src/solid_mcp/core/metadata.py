"""Line-oriented container metadata scan.

This is not a Turtle parser. It reads a container description one line at a
time and tracks a single "current subject" positionally, which is enough for
the listings Solid servers emit when each child is described on its own line.
Known limits of the scan:

* a statement closes on any line ending in ``.`` or ``;`` (or a blank line), so a
  ``dc:format`` on the line after a ``;`` is not attached to any subject;
* a subject still open at end of input is dropped;
* relative IRIs (``<child/>``) are not recognised as subjects.
"""

import re

from solid_mcp.core.urls import is_absolute_url
from solid_mcp.models import ResourceDescriptor, ResourceKind

LDP_CONTAINER = "http://www.w3.org/ns/ldp#Container"
LDP_BASIC_CONTAINER = "http://www.w3.org/ns/ldp#BasicContainer"
DC_FORMAT = "http://purl.org/dc/terms/format"

_CONTAINER_MARKERS = (LDP_CONTAINER, "ldp:Container")
_FORMAT_MARKERS = (DC_FORMAT, "dc:format", "dcterms:format")
_DIRECTIVES = ("@prefix", "@base", "PREFIX ", "BASE ")

_IRI_RE = re.compile(r"<([^<>\s]+)>")
_QUOTED_RE = re.compile(r'"([^"]+)"')


def is_container(body: str) -> bool:
    """Cheap check: does any container-type marker appear anywhere in ``body``?"""
    return any(marker in body for marker in _CONTAINER_MARKERS)


def _subject_of(line: str, container_url: str) -> str | None:
    tokens = [t for t in _IRI_RE.findall(line) if is_absolute_url(t)]
    if not tokens:
        return None
    if line.startswith("<") and line.startswith(f"<{tokens[0]}>"):
        return tokens[0]
    if tokens[0] != container_url:
        return tokens[0]
    return None


def _format_of(line: str) -> str | None:
    for marker in _FORMAT_MARKERS:
        index = line.find(marker)
        if index >= 0:
            match = _QUOTED_RE.search(line, index + len(marker))
            return match.group(1) if match else None
    return None


def extract_children(body: str, container_url: str) -> list[ResourceDescriptor]:
    """Collect the child descriptors declared in a container's RDF body.

    The container's own locator is never part of the result.
    """
    children: list[ResourceDescriptor] = []
    subject = ""
    container_flag = False
    content_type = ""

    for raw in body.splitlines():
        line = raw.strip()
        if line.startswith(_DIRECTIVES):
            continue

        opened = _subject_of(line, container_url)
        if opened is not None:
            subject = opened
            container_flag = False
            content_type = ""

        if any(marker in line for marker in _CONTAINER_MARKERS):
            container_flag = True

        declared = _format_of(line)
        if declared:
            content_type = declared

        if subject and (line == "" or line.endswith((".", ";"))):
            if subject != container_url:
                children.append(
                    ResourceDescriptor(
                        uri=subject,
                        kind=ResourceKind.CONTAINER if container_flag else ResourceKind.RESOURCE,
                        content_type=content_type or None,
                    )
                )
            subject = ""

    return children
