"""
Pytest configuration and fixtures for textanchor tests
"""
import pytest

from textanchor.chunker import ChunkRange
from textanchor.sources import TextChunkSource


@pytest.fixture
def hello_world():
    """The chunks "Hello ", "World", "! Hello World!" as a scope"""
    return TextChunkSource(["Hello ", "World", "! Hello World!"])


@pytest.fixture
def positions():
    """Factory fixture turning a range over a TextChunkSource into code unit positions.

    Usage:
        def test_example(hello_world, positions):
            assert positions(hello_world, some_range) == (6, 11)
    """

    def _positions(source: TextChunkSource, found: ChunkRange) -> tuple[int, int]:
        starts = {}
        total = 0
        for chunk in source.chunks:
            starts[id(chunk)] = total
            total += len(chunk.data)
        return (
            starts[id(found.start_chunk)] + found.start_index,
            starts[id(found.end_chunk)] + found.end_index,
        )

    return _positions


@pytest.fixture
def naive_matches():
    """Factory fixture finding (start, end) of every exact match by plain string search."""

    def _naive(text: str, exact: str, prefix: str = "", suffix: str = "") -> list[tuple[int, int]]:
        pattern = prefix + exact + suffix
        found = []
        index = text.find(pattern)
        while index != -1:
            start = index + len(prefix)
            found.append((start, start + len(exact)))
            index = text.find(pattern, index + 1)
        return found

    return _naive
