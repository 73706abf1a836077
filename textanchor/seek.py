"""Seekers: position-addressable cursors over a chunker.

A ``TextSeeker`` counts positions in code units, i.e. indexes into the
``str`` data of the chunks. A ``CodePointSeeker`` wraps it to count code
points instead. The two differ only for text that carries UTF-16 surrogate
pairs as two separate units, as text taken from browser DOM offsets or
decoded with ``surrogatepass`` does. A surrogate pair is never split.
"""

from __future__ import annotations

from typing import Any, Generic

from textanchor.chunker import Chunker, ChunkRange, TChunk, chunk_equals
from textanchor.errors import AnchoringError, BoundaryExhaustedError, InvalidSelectorError


class TextSeeker(Generic[TChunk]):
    """Cursor addressing the text of a chunker by code unit position.

    Position 0 is the start of the chunker's current chunk at construction,
    so pass a freshly created chunker to count from the start of its scope.
    A boundary point at the end of a chunk is always represented as the start
    of the next chunk, except at the end of the last chunk.

    Moves that would run past either end raise ``BoundaryExhaustedError``.
    The seeker then stays at the end it ran into, with its position still
    correct.
    """

    def __init__(self, chunker: Chunker[TChunk]) -> None:
        self.chunker = chunker
        self.offset_in_chunk = 0
        # Position of the first character of the current chunk
        self._chunk_position = 0

    @property
    def position(self) -> int:
        """Number of code units between the start of the scope and the cursor."""
        return self._chunk_position + self.offset_in_chunk

    @property
    def current_chunk(self) -> TChunk | None:
        return self.chunker.current_chunk

    def read(self, length: int) -> str:
        """Read ``length`` code units, backwards if negative.

        Text read backwards is still returned in reading order.
        """
        return self._seek(self.position + length, capture=True)

    def read_to(self, target: int) -> str:
        """Read up to the given position."""
        return self._seek(target, capture=True)

    def seek_by(self, delta: int) -> None:
        self._seek(self.position + delta)

    def seek_to(self, target: int) -> None:
        self._seek(target)

    def seek_to_chunk(self, target_chunk: Any, offset: int = 0) -> None:
        """Move the cursor to a boundary point given as chunk and offset.

        The chunk is searched for forwards first, then backwards.

        Raises:
            AnchoringError: If the chunk is not part of this chunker's scope
            InvalidSelectorError: If the offset lies outside the chunk
        """
        found = chunk_equals(self.current_chunk, target_chunk)
        while not found and self._step_chunk(forward=True):
            found = chunk_equals(self.current_chunk, target_chunk)
        while not found and self._step_chunk(forward=False):
            found = chunk_equals(self.current_chunk, target_chunk)
        if not found:
            raise AnchoringError(f"Chunk {target_chunk!r} is not part of the scope")

        if not 0 <= offset <= len(target_chunk.data):
            raise InvalidSelectorError(
                f"offset {offset} lies outside a chunk of length {len(target_chunk.data)}"
            )
        self.offset_in_chunk = offset
        # Re-seeking in place moves an end-of-chunk boundary to the next chunk
        self._seek(self.position)

    def _step_chunk(self, forward: bool) -> bool:
        """Move to the start of the adjacent chunk, if there is one."""
        current = self.chunker.current_chunk
        if current is None:
            return False
        if forward:
            if self.chunker.read_next() is None:
                return False
            self._chunk_position += len(current.data)
        else:
            previous = self.chunker.read_prev()
            if previous is None:
                return False
            self._chunk_position -= len(previous.data)
        self.offset_in_chunk = 0
        return True

    def _seek(self, target: int, capture: bool = False) -> str:
        chunk = self.chunker.current_chunk
        if chunk is None:
            if target != 0:
                raise BoundaryExhaustedError(target, 0)
            return ""

        pieces: list[str] = []

        if target >= self.position:
            while True:
                data = chunk.data
                chunk_end = self._chunk_position + len(data)
                # Strictly before the end: a target at the very end of this
                # chunk is taken to be the start of the next one.
                if target < chunk_end:
                    new_offset = target - self._chunk_position
                    if capture:
                        pieces.append(data[self.offset_in_chunk : new_offset])
                    self.offset_in_chunk = new_offset
                    break

                if capture:
                    pieces.append(data[self.offset_in_chunk :])
                next_chunk = self.chunker.read_next()
                if next_chunk is None:
                    self.offset_in_chunk = len(data)
                    if self.position == target:
                        break
                    raise BoundaryExhaustedError(target, self.position)
                self._chunk_position = chunk_end
                self.offset_in_chunk = 0
                chunk = next_chunk
            return "".join(pieces)

        while True:
            if self._chunk_position <= target:
                new_offset = target - self._chunk_position
                if capture:
                    pieces.append(chunk.data[new_offset : self.offset_in_chunk])
                self.offset_in_chunk = new_offset
                break

            if capture:
                pieces.append(chunk.data[: self.offset_in_chunk])
            previous = self.chunker.read_prev()
            if previous is None:
                self.offset_in_chunk = 0
                raise BoundaryExhaustedError(target, self.position)
            chunk = previous
            self._chunk_position -= len(previous.data)
            self.offset_in_chunk = len(previous.data)
        pieces.reverse()
        return "".join(pieces)


def is_high_surrogate(unit: str) -> bool:
    return "\ud800" <= unit <= "\udbff"


def is_low_surrogate(unit: str) -> bool:
    return "\udc00" <= unit <= "\udfff"


def read_code_point(seeker: TextSeeker, backward: bool = False) -> str:
    """Read one code point, as one or two code units.

    A lone surrogate counts as a code point of its own. When the unit after a
    high surrogate (or before a low one) turns out not to complete a pair, it
    is given back to the seeker.
    """
    step = -1 if backward else 1
    unit = seeker.read(step)
    opens_pair = is_low_surrogate(unit) if backward else is_high_surrogate(unit)
    if not opens_pair:
        return unit

    try:
        other = seeker.read(step)
    except BoundaryExhaustedError:
        # Lone surrogate at the edge of the scope
        return unit

    if backward and is_high_surrogate(other):
        return other + unit
    if not backward and is_low_surrogate(other):
        return unit + other
    seeker.seek_by(-step)
    return unit


class CodePointSeeker(Generic[TChunk]):
    """Cursor addressing the text of a chunker by code point position.

    Wraps a ``TextSeeker`` that must be at position 0. Both seekers move
    together, so the wrapped seeker's boundary point is always the one
    reached by the last code point move.
    """

    def __init__(self, raw: TextSeeker[TChunk]) -> None:
        if raw.position != 0:
            raw.seek_to(0)
        self.raw = raw
        self.position = 0

    @property
    def current_chunk(self) -> TChunk | None:
        return self.raw.current_chunk

    @property
    def offset_in_chunk(self) -> int:
        return self.raw.offset_in_chunk

    def read1(self, backward: bool = False) -> str:
        """Read exactly one code point, forwards or backwards."""
        char = read_code_point(self.raw, backward=backward)
        self.position += -1 if backward else 1
        return char

    def read(self, length: int) -> str:
        """Read ``length`` code points, backwards if negative."""
        if length >= 0:
            return "".join(self.read1() for _ in range(length))
        chars = [self.read1(backward=True) for _ in range(-length)]
        chars.reverse()
        return "".join(chars)

    def seek_to(self, target: int) -> None:
        self.read(target - self.position)

    def seek_by(self, delta: int) -> None:
        self.read(delta)

    def seek_to_unit(self, unit_position: int) -> None:
        """Move to the code point boundary at the given code unit position.

        Raises:
            InvalidSelectorError: If the position splits a surrogate pair
        """
        while self.raw.position < unit_position:
            self.read1()
        while self.raw.position > unit_position:
            self.read1(backward=True)
        if self.raw.position != unit_position:
            raise InvalidSelectorError(
                f"code unit position {unit_position} splits a surrogate pair"
            )


def read_range(target: ChunkRange[TChunk], chunker: Chunker[TChunk]) -> str:
    """Read the text of a range from a fresh chunker over its scope.

    Raises:
        InvalidSelectorError: If the range ends before it starts
    """
    seeker = TextSeeker(chunker)
    seeker.seek_to_chunk(target.start_chunk, target.start_index)
    start = seeker.position
    seeker.seek_to_chunk(target.end_chunk, target.end_index)
    end = seeker.position
    if end < start:
        raise InvalidSelectorError(f"range ends ({end}) before it starts ({start})")
    return seeker.read(start - end)
