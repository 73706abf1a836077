"""Tests for anchoring in lxml element trees."""

import pytest
from lxml import etree

from textanchor.chunker import iter_chunks
from textanchor.errors import InvalidSelectorError
from textanchor.selectors import TextPositionSelector, TextQuoteSelector
from textanchor.text_position import describe_text_position
from textanchor.text_quote import describe_text_quote
from textanchor.xml import (
    TAIL,
    TEXT,
    ElementChunker,
    XmlBoundary,
    describe_boundary,
    range_to_boundaries,
    to_boundary,
)

DOCUMENT = "<p>Hello <b>World</b>! Hello <i>Wor</i>ld!<!-- note --> end</p>"


@pytest.fixture
def root():
    return etree.fromstring(DOCUMENT)


def chunk_texts(chunker: ElementChunker) -> list[str]:
    return [chunk.data for chunk in iter_chunks(chunker)]


class TestElementChunker:
    """Tests for walking the text slots of a tree."""

    def test_document_order(self, root) -> None:
        assert chunk_texts(ElementChunker(root)) == ["Hello ", "World", "! Hello ", "Wor", "ld!", " end"]

    def test_slots_of_chunks(self, root) -> None:
        chunks = list(iter_chunks(ElementChunker(root)))
        b = root.find("b")

        assert (chunks[0].element, chunks[0].slot) == (root, TEXT)
        assert (chunks[1].element, chunks[1].slot) == (b, TEXT)
        assert (chunks[2].element, chunks[2].slot) == (b, TAIL)

    def test_comment_text_is_skipped(self, root) -> None:
        assert "note" not in "".join(chunk_texts(ElementChunker(root)))

    def test_empty_slots_are_skipped_both_ways(self) -> None:
        root = etree.fromstring("<p><b></b>x<i/><i>y</i></p>")
        chunker = ElementChunker(root)

        assert chunker.current_chunk.data == "x"
        assert chunker.read_next().data == "y"
        assert chunker.read_next() is None
        assert chunker.read_prev().data == "x"
        assert chunker.read_prev() is None
        assert chunker.current_chunk.data == "x"

    def test_tree_without_text(self) -> None:
        chunker = ElementChunker(etree.fromstring("<p><b/></p>"))
        assert chunker.current_chunk is None
        assert chunker.read_next() is None

    def test_chunks_from_different_chunkers_are_equal(self, root) -> None:
        first = ElementChunker(root).current_chunk
        second = ElementChunker(root).current_chunk

        assert first is not second
        assert first == second

    def test_clipped_scope(self, root) -> None:
        b, i = root.find("b"), root.find("i")
        chunker = ElementChunker(root, start=XmlBoundary(b, TAIL, 2), end=XmlBoundary(i, TAIL, 2))
        chunks = list(iter_chunks(chunker))

        assert [chunk.data for chunk in chunks] == ["Hello ", "Wor", "ld"]
        assert chunks[0].start_offset == 2
        assert chunks[-1].end_offset == 2
        assert to_boundary(chunks[0], 3) == XmlBoundary(b, TAIL, 5)

    def test_clipped_chunk_differs_from_unclipped(self, root) -> None:
        b = root.find("b")
        clipped = ElementChunker(root, start=XmlBoundary(b, TEXT, 1)).current_chunk
        whole = list(iter_chunks(ElementChunker(root)))[1]

        assert clipped.data == "orld"
        assert clipped != whole

    def test_boundary_outside_root_raises(self, root) -> None:
        other = etree.fromstring("<p>x</p>")
        with pytest.raises(InvalidSelectorError):
            ElementChunker(root, start=XmlBoundary(other, TEXT, 0))


class TestAnchoring:
    """Matching and describing across inline elements."""

    def test_quote_across_elements(self, root) -> None:
        result = TextQuoteSelector(exact="World").locate(root)

        assert result.ambiguous
        start, end = range_to_boundaries(result.matches[1].range)
        assert start == XmlBoundary(root.find("i"), TEXT, 0)
        assert end == XmlBoundary(root.find("i"), TAIL, 2)

    def test_describe_quote(self, root) -> None:
        scope = lambda: ElementChunker(root)  # noqa: E731
        target = TextQuoteSelector(exact="World").locate(root).matches[1].range

        selector = describe_text_quote(target, scope)

        assert selector == TextQuoteSelector(exact="World", suffix="! e")
        result = selector.locate(root)
        assert result.found
        assert result.match.range == target

    def test_describe_position(self, root) -> None:
        scope = lambda: ElementChunker(root)  # noqa: E731
        target = TextQuoteSelector(exact="World").locate(root).matches[1].range

        selector = describe_text_position(target, scope)

        assert selector == TextPositionSelector(start=19, end=24)
        assert selector.locate(root).match.matched_text == "World"

    def test_element_tree_is_accepted(self, root) -> None:
        result = TextQuoteSelector(exact="end").locate(root.getroottree())
        assert result.found


class TestDescribeBoundary:
    """Tests for describe_boundary."""

    def test_plain_tag(self, root) -> None:
        assert describe_boundary(XmlBoundary(root.find("b"), TAIL, 4)) == "<b> tail @ 4"

    def test_namespace_is_dropped(self) -> None:
        root = etree.fromstring('<a:p xmlns:a="urn:example">hi</a:p>')
        assert describe_boundary(XmlBoundary(root, TEXT, 1)) == "<p> text @ 1"

    def test_comment(self, root) -> None:
        comment = root[-1]
        assert describe_boundary(XmlBoundary(comment, TAIL, 0)) == "<!--> tail @ 0"
