"""
Streaming matcher for TextQuoteSelector.

Finds every occurrence of ``prefix + exact + suffix`` in a stream of chunks,
including occurrences that straddle chunk boundaries, without joining the
chunks into one string. Only the chunks overlapping a still-open partial
match are remembered, so the extra memory stays proportional to the length
of the pattern.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from textanchor.chunker import ChunkRange, TChunk
from textanchor.config import validate_quote_selector
from textanchor.errors import AnchoringError
from textanchor.logging_config import logger

if TYPE_CHECKING:
    from textanchor.selectors import TextQuoteSelector


@dataclass
class _PartialMatch:
    """An occurrence of the pattern that began in an earlier chunk."""

    start_position: int
    """Code unit position where the pattern starts."""

    characters_matched: int
    """How much of the pattern has been matched so far."""


def match_text_quote(
    selector: TextQuoteSelector,
    chunks: Iterable[TChunk],
) -> Iterator[ChunkRange[TChunk]]:
    """
    Find all matches of a quote selector in a stream of chunks.

    The chunks are pulled lazily, in a single forward pass. Matches are
    yielded in document order and cover only the ``exact`` text, never the
    prefix or suffix around it. Overlapping occurrences are all reported.

    Args:
        selector: Selector with ``exact`` and optional ``prefix``/``suffix``
        chunks: The chunks of the scope, in order (see ``iter_chunks``)

    Returns:
        Iterator over the matching ranges

    Raises:
        InvalidSelectorError: If ``exact`` is empty (raised immediately,
            before any chunk is read)
    """
    exact = selector.exact
    prefix = selector.prefix or ""
    suffix = selector.suffix or ""
    validate_quote_selector(exact, prefix, suffix)
    return _match_all(chunks, exact, prefix, suffix)


def _match_all(
    chunks: Iterable[TChunk],
    exact: str,
    prefix: str,
    suffix: str,
) -> Iterator[ChunkRange[TChunk]]:
    pattern = prefix + exact + suffix
    partial_matches: list[_PartialMatch] = []
    # Recent chunks with the position of their first character
    window: deque[tuple[TChunk, int]] = deque()
    chunk_position = 0

    for chunk in chunks:
        data = chunk.data
        window.append((chunk, chunk_position))

        # Continue the partial matches carried over from previous chunks
        surviving: list[_PartialMatch] = []
        for partial in partial_matches:
            remaining = pattern[partial.characters_matched :]
            if len(remaining) > len(data):
                # Too short to complete the match; the whole chunk must fit
                if remaining.startswith(data):
                    partial.characters_matched += len(data)
                    surviving.append(partial)
            elif data.startswith(remaining):
                match = _range_in_window(
                    window, partial.start_position + len(prefix), len(exact)
                )
                logger.debug(f"Quote {exact!r} matched across chunks at {partial.start_position}")
                yield match
        partial_matches = surviving

        # Whole occurrences inside this chunk, possibly overlapping
        if len(pattern) <= len(data):
            index = data.find(pattern)
            while index != -1:
                start_index = index + len(prefix)
                logger.debug(f"Quote {exact!r} matched at {chunk_position + index}")
                yield ChunkRange(chunk, start_index, chunk, start_index + len(exact))
                index = data.find(pattern, index + 1)

        # Occurrences that start near the end of this chunk and run past it
        for index in range(max(len(data) - len(pattern) + 1, 0), len(data)):
            tail = data[index:]
            if pattern.startswith(tail):
                partial_matches.append(
                    _PartialMatch(
                        start_position=chunk_position + index,
                        characters_matched=len(tail),
                    )
                )

        chunk_position += len(data)

        # Forget chunks that no open partial match reaches back into
        earliest = min(
            (partial.start_position for partial in partial_matches),
            default=chunk_position,
        )
        while window and window[0][1] + len(window[0][0].data) <= earliest:
            window.popleft()


def _range_in_window(
    window: Iterable[tuple[TChunk, int]],
    start: int,
    length: int,
) -> ChunkRange[TChunk]:
    """Turn a span given by position into a range over the remembered chunks.

    The start is placed at the beginning of a chunk rather than at the end of
    the one before it; the end is placed at the end of a chunk rather than at
    the beginning of the one after it.
    """
    end = start + length
    start_point = end_point = None
    for chunk, chunk_start in window:
        chunk_end = chunk_start + len(chunk.data)
        if start_point is None and chunk_start <= start < chunk_end:
            start_point = (chunk, start - chunk_start)
        if end_point is None and chunk_start < end <= chunk_end:
            end_point = (chunk, end - chunk_start)
    if start_point is None or end_point is None:
        raise AnchoringError(f"Match at {start}..{end} lies outside the chunks read")
    return ChunkRange(start_point[0], start_point[1], end_point[0], end_point[1])
