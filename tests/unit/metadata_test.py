"""Tests for the line-oriented container metadata scan."""

from __future__ import annotations

from textwrap import dedent

from solid_mcp.core.metadata import extract_children, is_container
from solid_mcp.models import ResourceKind

CONTAINER = "https://pod.example/notes/"

LISTING = dedent(
    """\
    @prefix ldp: <http://www.w3.org/ns/ldp#>.
    @prefix dc: <http://purl.org/dc/terms/>.

    <https://pod.example/notes/> a ldp:BasicContainer, ldp:Container.
    <https://pod.example/notes/> ldp:contains <https://pod.example/notes/a.txt>.
    <https://pod.example/notes/a.txt> dc:format "text/plain".
    <https://pod.example/notes/data.json> dc:format "application/json".
    """
)


class TestIsContainer:
    def test_full_iri_marker(self) -> None:
        assert is_container("<> a <http://www.w3.org/ns/ldp#Container> .") is True

    def test_prefixed_marker(self) -> None:
        assert is_container("<> a ldp:Container .") is True

    def test_basic_container_alone_is_not_a_match(self) -> None:
        assert is_container("<> a <http://www.w3.org/ns/ldp#BasicContainer> .") is False

    def test_marker_anywhere_in_body(self) -> None:
        assert is_container('<#me> <http://x.example/note> "see ldp:Container docs".') is True

    def test_plain_document(self) -> None:
        assert is_container("<#me> a <http://xmlns.com/foaf/0.1/Person>.") is False


class TestExtractChildren:
    def test_listing_yields_children_with_formats(self) -> None:
        children = extract_children(LISTING, CONTAINER)

        assert [c.uri for c in children] == [
            "https://pod.example/notes/a.txt",
            "https://pod.example/notes/data.json",
        ]
        assert [c.content_type for c in children] == ["text/plain", "application/json"]
        assert all(c.kind is ResourceKind.RESOURCE for c in children)

    def test_container_never_lists_itself(self) -> None:
        body = "<https://pod.example/notes/> a ldp:Container.\n<https://pod.example/notes/> a ldp:Container;\n"
        assert extract_children(body, CONTAINER) == []

    def test_child_container_is_flagged(self) -> None:
        body = "<https://pod.example/notes/2024/> a <http://www.w3.org/ns/ldp#Container>.\n"
        (child,) = extract_children(body, CONTAINER)
        assert child.kind is ResourceKind.CONTAINER
        assert child.content_type is None

    def test_full_iri_format_property(self) -> None:
        body = '<https://pod.example/notes/x.ttl> <http://purl.org/dc/terms/format> "text/turtle".\n'
        (child,) = extract_children(body, CONTAINER)
        assert child.content_type == "text/turtle"

    def test_unclosed_subject_at_end_is_dropped(self) -> None:
        body = '<https://pod.example/notes/a.txt> dc:format "text/plain".\n<https://pod.example/notes/b.txt> a ldp:Resource'
        children = extract_children(body, CONTAINER)
        assert [c.uri for c in children] == ["https://pod.example/notes/a.txt"]

    def test_blank_line_closes_statement(self) -> None:
        body = "<https://pod.example/notes/a.txt> a ldp:Resource\n\n"
        (child,) = extract_children(body, CONTAINER)
        assert child.uri == "https://pod.example/notes/a.txt"

    def test_format_after_semicolon_line_is_not_attached(self) -> None:
        body = dedent(
            """\
            <https://pod.example/notes/a.txt> a ldp:Resource;
                dc:format "text/plain".
            """
        )
        (child,) = extract_children(body, CONTAINER)
        assert child.uri == "https://pod.example/notes/a.txt"
        assert child.content_type is None

    def test_format_attaches_to_most_recent_subject(self) -> None:
        body = dedent(
            """\
            <https://pod.example/notes/a.txt> a ldp:Resource
            <https://pod.example/notes/b.txt> a ldp:Resource
                dc:format "text/markdown".
            """
        )
        (child,) = extract_children(body, CONTAINER)
        assert child.uri == "https://pod.example/notes/b.txt"
        assert child.content_type == "text/markdown"

    def test_object_position_iri_opens_subject(self) -> None:
        body = "    ldp:contains <https://pod.example/notes/c.txt>.\n"
        (child,) = extract_children(body, CONTAINER)
        assert child.uri == "https://pod.example/notes/c.txt"

    def test_relative_iris_are_ignored(self) -> None:
        body = '<c.txt> dc:format "text/plain".\n'
        assert extract_children(body, CONTAINER) == []

    def test_prefix_directives_are_not_children(self) -> None:
        body = "@prefix ldp: <http://www.w3.org/ns/ldp#>.\nPREFIX dc: <http://purl.org/dc/terms/>\n"
        assert extract_children(body, CONTAINER) == []
