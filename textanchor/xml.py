"""Chunk source over an lxml element tree.

Every text slot of the tree becomes a chunk: an element's ``.text``, then
the slots of its children, then each child's ``.tail``. This is document
order, the order in which the text reads. Comments and processing
instructions contribute only their tail.

A scope may clip the tree to the text between two boundary points, each an
element slot and an offset into its text. The first and last chunk then
hold only the part of their slot inside the scope.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from lxml import etree

from textanchor.chunker import ChunkRange
from textanchor.errors import InvalidSelectorError

TEXT = "text"
TAIL = "tail"


@dataclass(frozen=True)
class XmlBoundary:
    """A concrete position in the tree: a text slot and an offset into it."""

    element: etree._Element
    slot: str
    """Either "text" (inside the element) or "tail" (right after it)."""

    offset: int = 0


@dataclass(frozen=True, eq=False)
class ElementTextChunk:
    """The part of one text slot that lies inside the scope."""

    element: etree._Element
    slot: str
    start_offset: int
    end_offset: int
    data: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementTextChunk):
            return NotImplemented
        return (
            self.element is other.element
            and self.slot == other.slot
            and self.start_offset == other.start_offset
            and self.end_offset == other.end_offset
        )

    def __hash__(self) -> int:
        return hash((id(self.element), self.slot, self.start_offset, self.end_offset))

    def __str__(self) -> str:
        return self.data


def text_slots(element: etree._Element) -> Iterator[tuple[etree._Element, str]]:
    """Yield the text slots inside an element, in document order."""
    if not isinstance(element.tag, str):
        # Comment or processing instruction: its text is not document text
        return
    yield element, TEXT
    for child in element:
        yield from text_slots(child)
        yield child, TAIL


def _slot_text(element: etree._Element, slot: str) -> str:
    return (element.text if slot == TEXT else element.tail) or ""


class ElementChunker:
    """Chunker over the text slots of an element tree.

    Slots that are empty, or clipped to nothing by the scope, are skipped in
    both directions.
    """

    def __init__(
        self,
        root: etree._Element,
        start: XmlBoundary | None = None,
        end: XmlBoundary | None = None,
    ) -> None:
        """Initialize the chunker.

        Args:
            root: Element whose text is chunked
            start: Optional boundary where the scope starts
            end: Optional boundary where the scope ends

        Raises:
            InvalidSelectorError: If a boundary is not a text slot of root
        """
        self._slots = list(text_slots(root))
        self._start = start
        self._end = end
        self._first = self._slot_index(start) if start else 0
        self._last = self._slot_index(end) if end else len(self._slots) - 1
        self._cache: dict[int, ElementTextChunk | None] = {}
        self._index = self._find(self._first, 1)

    def _slot_index(self, boundary: XmlBoundary) -> int:
        for index, (element, slot) in enumerate(self._slots):
            if element is boundary.element and slot == boundary.slot:
                return index
        raise InvalidSelectorError(
            f"<{boundary.element.tag}> {boundary.slot} is not inside the scope root"
        )

    def _chunk_at(self, index: int) -> ElementTextChunk | None:
        if index not in self._cache:
            element, slot = self._slots[index]
            text = _slot_text(element, slot)
            start_offset = self._start.offset if self._start and index == self._first else 0
            end_offset = self._end.offset if self._end and index == self._last else len(text)
            if end_offset <= start_offset:
                self._cache[index] = None
            else:
                self._cache[index] = ElementTextChunk(
                    element=element,
                    slot=slot,
                    start_offset=start_offset,
                    end_offset=end_offset,
                    data=text[start_offset:end_offset],
                )
        return self._cache[index]

    def _find(self, index: int, step: int) -> int | None:
        while self._first <= index <= self._last:
            if self._chunk_at(index) is not None:
                return index
            index += step
        return None

    @property
    def current_chunk(self) -> ElementTextChunk | None:
        if self._index is None:
            return None
        return self._chunk_at(self._index)

    def read_next(self) -> ElementTextChunk | None:
        return self._move(1)

    def read_prev(self) -> ElementTextChunk | None:
        return self._move(-1)

    def _move(self, step: int) -> ElementTextChunk | None:
        if self._index is None:
            return None
        found = self._find(self._index + step, step)
        if found is None:
            return None
        self._index = found
        return self._chunk_at(found)


def to_boundary(chunk: ElementTextChunk, index: int) -> XmlBoundary:
    """Turn a chunk-relative index into a boundary point in the tree."""
    return XmlBoundary(chunk.element, chunk.slot, chunk.start_offset + index)


def range_to_boundaries(
    match: ChunkRange[ElementTextChunk],
) -> tuple[XmlBoundary, XmlBoundary]:
    """Concrete tree boundaries of a range found in an ElementChunker."""
    return (
        to_boundary(match.start_chunk, match.start_index),
        to_boundary(match.end_chunk, match.end_index),
    )


def describe_boundary(boundary: XmlBoundary) -> str:
    """Short human readable form of a boundary, e.g. ``<al> text @ 4``."""
    tag = boundary.element.tag
    if not isinstance(tag, str):
        tag = "!--"
    elif "}" in tag:
        tag = tag.split("}")[-1]
    return f"<{tag}> {boundary.slot} @ {boundary.offset}"
