"""Describe a range as a TextPositionSelector."""

from __future__ import annotations

from collections.abc import Callable

from textanchor.chunker import Chunker, ChunkRange, TChunk
from textanchor.errors import InvalidSelectorError
from textanchor.seek import CodePointSeeker, TextSeeker
from textanchor.selectors import TextPositionSelector


def describe_text_position(
    target: ChunkRange[TChunk],
    scope: Callable[[], Chunker[TChunk]],
) -> TextPositionSelector:
    """
    Describe a range by the code point offsets of its boundaries.

    Args:
        target: The range to describe
        scope: Factory returning a fresh chunker over the scope

    Returns:
        Selector whose offsets count code points from the start of the scope

    Raises:
        InvalidSelectorError: If the range is reversed, or a boundary falls
            inside a surrogate pair
    """
    units = TextSeeker(scope())
    units.seek_to_chunk(target.start_chunk, target.start_index)
    start_unit = units.position
    units.seek_to_chunk(target.end_chunk, target.end_index)
    end_unit = units.position
    if end_unit < start_unit:
        raise InvalidSelectorError(
            f"range ends ({end_unit}) before it starts ({start_unit})"
        )

    code_points = CodePointSeeker(TextSeeker(scope()))
    code_points.seek_to_unit(start_unit)
    start = code_points.position
    code_points.seek_to_unit(end_unit)
    return TextPositionSelector(start=start, end=code_points.position)
