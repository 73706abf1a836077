"""Resolve a TextPositionSelector to a range."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from textanchor.chunker import Chunker, ChunkRange, TChunk
from textanchor.config import validate_position_selector
from textanchor.errors import BoundaryExhaustedError
from textanchor.seek import CodePointSeeker, TextSeeker

if TYPE_CHECKING:
    from textanchor.selectors import TextPositionSelector


def resolve_text_position(
    selector: TextPositionSelector,
    chunker: Chunker[TChunk],
) -> ChunkRange[TChunk]:
    """
    Find the range between two code point offsets.

    Args:
        selector: Selector with ``start`` and ``end`` code point offsets
        chunker: A fresh chunker over the scope the offsets count from

    Returns:
        The range from ``start`` to ``end``

    Raises:
        InvalidSelectorError: If an offset is negative or ``end < start``
        BoundaryExhaustedError: If an offset lies beyond the end of the scope
    """
    validate_position_selector(selector.start, selector.end)
    seeker = CodePointSeeker(TextSeeker(chunker))

    seeker.seek_to(selector.start)
    start_chunk, start_index = seeker.current_chunk, seeker.offset_in_chunk
    seeker.seek_to(selector.end)
    end_chunk, end_index = seeker.current_chunk, seeker.offset_in_chunk

    if start_chunk is None or end_chunk is None:
        # Only an empty scope has no chunk to put a boundary point in
        raise BoundaryExhaustedError(selector.end, 0)
    return ChunkRange(start_chunk, start_index, end_chunk, end_index)


def match_text_position(
    selector: TextPositionSelector,
    chunker: Chunker[TChunk],
) -> Iterator[ChunkRange[TChunk]]:
    """Matcher form of ``resolve_text_position``: yields its single range.

    The selector is validated immediately; the scope is only read once the
    iterator is advanced.
    """
    validate_position_selector(selector.start, selector.end)

    def _match_all() -> Iterator[ChunkRange[TChunk]]:
        yield resolve_text_position(selector, chunker)

    return _match_all()
