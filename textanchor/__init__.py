"""
textanchor - Anchor W3C text selectors in chunked text.

This library provides:
- Seekers that address text spread over many chunks by code unit or code point
- A streaming TextQuoteSelector matcher that never joins the chunks
- A describer that finds the shortest unambiguous quote for a range
- TextPositionSelector resolution and description

Import patterns:

    # Primary API (recommended)
    from textanchor import TextQuoteSelector, describe_text_quote

    # Full submodule imports (for internal types)
    from textanchor.chunker import ChunkRange, TextChunk
    from textanchor.seek import TextSeeker, CodePointSeeker

Example usage:

    from textanchor import TextChunkSource, TextQuoteSelector, describe_text_quote

    source = TextChunkSource(["Hello ", "World", "! Hello World!"])
    result = TextQuoteSelector(exact="World").locate(source)
    print(result.status)  # MatchStatus.AMBIGUOUS

    selector = describe_text_quote(result.matches[0].range, source)
    print(selector.suffix)  # "! "
"""

from textanchor.chunker import Chunk, Chunker, ChunkRange, TextChunk, iter_chunks
from textanchor.errors import (
    AmbiguousTargetError,
    AnchoringError,
    BoundaryExhaustedError,
    InvalidSelectorError,
)
from textanchor.selectors import (
    Match,
    MatchResult,
    MatchStatus,
    TextPositionSelector,
    TextQuoteSelector,
    selector_from_annotation,
)
from textanchor.sources import TextChunkSource, as_scope
from textanchor.text_position import (
    describe_text_position,
    match_text_position,
    resolve_text_position,
)
from textanchor.text_quote import describe_text_quote, match_text_quote

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "Chunker",
    "ChunkRange",
    "TextChunk",
    "TextChunkSource",
    "iter_chunks",
    "as_scope",
    "TextQuoteSelector",
    "TextPositionSelector",
    "Match",
    "MatchResult",
    "MatchStatus",
    "selector_from_annotation",
    "match_text_quote",
    "describe_text_quote",
    "match_text_position",
    "resolve_text_position",
    "describe_text_position",
    "AnchoringError",
    "BoundaryExhaustedError",
    "InvalidSelectorError",
    "AmbiguousTargetError",
]
