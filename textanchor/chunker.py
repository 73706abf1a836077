"""Chunks, chunkers and chunk ranges.

A chunk is an opaque piece of text with identity. A chunker is a
bidirectional cursor over an ordered stream of chunks. Everything else in
textanchor (seekers, matchers, describers) is written against these two
protocols, so any text container can be anchored into once it can hand out
its text piece by piece.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar


class Chunk(Protocol):
    """A piece of text drawn from a larger text source.

    Two chunks are the same chunk only if they are identical, or if the
    chunk type defines ``__eq__`` to say so. Equal text is not enough.
    """

    @property
    def data(self) -> str: ...


TChunk = TypeVar("TChunk", bound=Chunk)
TChunk_co = TypeVar("TChunk_co", bound=Chunk, covariant=True)


class Chunker(Protocol[TChunk_co]):
    """Stateful cursor over a sequence of chunks.

    ``current_chunk`` is None only when the sequence holds no chunks at all.
    ``read_next`` and ``read_prev`` move the cursor and return the chunk moved
    to, or return None and stay put at either end. Chunks with empty text may
    be skipped, but then they must be skipped in both directions.
    """

    @property
    def current_chunk(self) -> TChunk_co | None: ...

    def read_next(self) -> TChunk_co | None: ...

    def read_prev(self) -> TChunk_co | None: ...


def chunk_equals(a: Any, b: Any) -> bool:
    """Whether two chunks refer to the same piece of the text source."""
    return a is b or (a is not None and b is not None and a == b)


def iter_chunks(chunker: Chunker[TChunk]) -> Iterator[TChunk]:
    """Walk a chunker forward, starting with its current chunk."""
    chunk = chunker.current_chunk
    while chunk is not None:
        yield chunk
        chunk = chunker.read_next()


@dataclass(eq=False)
class ChunkRange(Generic[TChunk]):
    """A span of text between two boundary points.

    Each boundary point is a chunk plus a code unit offset into its data.
    Ranges compare equal when both boundary points refer to the same chunks
    (see ``chunk_equals``) at the same offsets.
    """

    start_chunk: TChunk
    start_index: int
    end_chunk: TChunk
    end_index: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChunkRange):
            return NotImplemented
        return (
            chunk_equals(self.start_chunk, other.start_chunk)
            and self.start_index == other.start_index
            and chunk_equals(self.end_chunk, other.end_chunk)
            and self.end_index == other.end_index
        )

    @property
    def collapsed(self) -> bool:
        """True if the range starts where it ends."""
        return (
            chunk_equals(self.start_chunk, self.end_chunk)
            and self.start_index == self.end_index
        )


@dataclass(frozen=True, eq=False)
class TextChunk:
    """A chunk of plain text, compared by identity."""

    data: str
    index: int = field(default=0)
    """Position of the chunk in the list it was created from."""

    def __str__(self) -> str:
        return self.data

    def __repr__(self) -> str:
        return f"TextChunk({self.index}: {self.data!r})"


class ListChunker(Generic[TChunk]):
    """Chunker over an in-memory sequence of chunks.

    Chunks with empty data are never visited, in either direction.
    """

    def __init__(self, chunks: Sequence[TChunk]) -> None:
        self._chunks = chunks
        self._index = self._find(0, 1)

    def _find(self, index: int, step: int) -> int | None:
        while 0 <= index < len(self._chunks):
            if self._chunks[index].data:
                return index
            index += step
        return None

    @property
    def current_chunk(self) -> TChunk | None:
        if self._index is None:
            return None
        return self._chunks[self._index]

    def read_next(self) -> TChunk | None:
        return self._move(1)

    def read_prev(self) -> TChunk | None:
        return self._move(-1)

    def _move(self, step: int) -> TChunk | None:
        if self._index is None:
            return None
        found = self._find(self._index + step, step)
        if found is None:
            return None
        self._index = found
        return self._chunks[found]
