"""Scopes: factories handing out fresh chunkers over the same text."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from lxml import etree

from textanchor.chunker import Chunker, ListChunker, TextChunk
from textanchor.xml import ElementChunker


class TextChunkSource:
    """Plain strings as a scope, one chunk per string.

    The chunks are created once, so every chunker handed out yields the very
    same chunk objects and ranges found through one chunker compare equal to
    ranges found through another.

    Example:
        source = TextChunkSource(["Hello ", "World", "! Hello World!"])
        matches = list(match_text_quote(selector, iter_chunks(source())))
    """

    def __init__(self, texts: Iterable[str]) -> None:
        self.chunks = [TextChunk(text, index) for index, text in enumerate(texts)]

    def __call__(self) -> ListChunker[TextChunk]:
        return ListChunker(self.chunks)

    @property
    def text(self) -> str:
        """All chunks joined together."""
        return "".join(chunk.data for chunk in self.chunks)


def as_scope(source: Any) -> Callable[[], Chunker[Any]]:
    """
    Turn the usual ways of passing text into a scope.

    Accepts a string (one chunk), a list or tuple of strings (one chunk each),
    an lxml element (see ``ElementChunker``) or anything that is already a
    chunker factory.

    Raises:
        TypeError: For anything else
    """
    if isinstance(source, str):
        return TextChunkSource([source])
    if isinstance(source, (list, tuple)) and all(isinstance(s, str) for s in source):
        return TextChunkSource(source)
    if isinstance(source, etree._ElementTree):
        source = source.getroot()
    if isinstance(source, etree._Element):
        root = source
        return lambda: ElementChunker(root)
    if callable(source):
        return source
    msg = f"source must be str, list[str], an lxml element or a chunker factory, got {type(source)}"
    raise TypeError(msg)
