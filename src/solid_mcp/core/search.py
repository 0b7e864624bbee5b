import logging

from solid_mcp.core.resolver import ResourceResolver
from solid_mcp.core.urls import filename_from_url
from solid_mcp.models import SearchHit

logger = logging.getLogger(__name__)

RELEVANCE = 0.8


async def _search_container(
    resolver: ResourceResolver,
    container_url: str,
    needle: str,
    recursive: bool,
    visited: set[str],
) -> list[SearchHit]:
    visited.add(container_url)
    listing = await resolver.read(container_url, include_content=False)
    if not listing.children:
        return []

    hits: list[SearchHit] = []
    for child in listing.children:
        if needle in filename_from_url(child.uri).lower():
            hits.append(SearchHit(**child.model_dump(), relevance=RELEVANCE))

        if recursive and child.is_container:
            child_url = resolver.normalize(child.uri)
            if child_url in visited:
                logger.debug("Skipping already visited container %s", child_url)
                continue
            hits.extend(await _search_container(resolver, child_url, needle, recursive, visited))
    return hits


async def search_resources(
    resolver: ResourceResolver,
    container_uri: str,
    search_term: str,
    recursive: bool = False,
) -> list[SearchHit]:
    """Find children whose filename contains ``search_term`` (case-insensitive).

    Hits come back in pre-order: a matching container precedes the matches
    found inside it. Every hit carries the same flat relevance. Each container
    is entered at most once, so cyclic containment terminates.
    """
    start = resolver.normalize(container_uri)
    hits = await _search_container(resolver, start, search_term.lower(), recursive, set())
    logger.info("Search for %r under %s found %d match(es)", search_term, start, len(hits))
    return hits
