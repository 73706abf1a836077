"""
Describe a range as a TextQuoteSelector.

The selector quotes the text of the range and adds as little prefix and
suffix context as is needed for the quote to match nowhere else in the
scope. Context is grown greedily: each round takes the first other match
and adds the shortest context that rules it out.
"""

from __future__ import annotations

from collections.abc import Callable

from textanchor.chunker import Chunker, ChunkRange, TChunk, iter_chunks
from textanchor.config import PREFER_PREFIX_ON_TIE, validate_quote_selector
from textanchor.errors import AmbiguousTargetError, BoundaryExhaustedError
from textanchor.logging_config import logger
from textanchor.seek import TextSeeker, read_code_point
from textanchor.selectors import TextQuoteSelector
from textanchor.text_quote.match import match_text_quote

Scope = Callable[[], Chunker[TChunk]]


def describe_text_quote(
    target: ChunkRange[TChunk],
    scope: Scope,
) -> TextQuoteSelector:
    """
    Create the shortest unambiguous quote selector for a range.

    Args:
        target: The range to describe
        scope: Factory returning a fresh chunker over the scope each call.
            Chunks from different calls must compare equal when they are
            the same piece of text.

    Returns:
        A selector that matches the scope exactly once, at ``target``

    Raises:
        InvalidSelectorError: If the range is empty or reversed
        AmbiguousTargetError: If no context in the scope sets the target
            apart from another occurrence of its text
    """
    target, exact = _normalize_target(target, scope)
    validate_quote_selector(exact)
    prefix = ""
    suffix = ""

    with logger.indent_block(f"Describing quote {exact!r}"):
        while True:
            selector = TextQuoteSelector(exact=exact, prefix=prefix, suffix=suffix)
            impostor = next(
                (
                    match
                    for match in match_text_quote(selector, iter_chunks(scope()))
                    if match != target
                ),
                None,
            )
            if impostor is None:
                logger.debug(f"Unique with prefix={prefix!r} suffix={suffix!r}")
                break

            sufficient_prefix = _context_needed(target, impostor, scope, backward=True)
            sufficient_suffix = _context_needed(target, impostor, scope, backward=False)
            logger.debug(
                f"Other match found; prefix candidate {sufficient_prefix!r}, "
                f"suffix candidate {sufficient_suffix!r}"
            )

            if sufficient_prefix is not None and (
                sufficient_suffix is None
                or _prefix_wins(sufficient_prefix, sufficient_suffix)
            ):
                prefix = sufficient_prefix
            elif sufficient_suffix is not None:
                suffix = sufficient_suffix
            else:
                logger.warning(f"Quote {exact!r} cannot be told apart from another match")
                raise AmbiguousTargetError(selector, impostor)

    return TextQuoteSelector(exact=exact, prefix=prefix, suffix=suffix)


def _prefix_wins(prefix: str, suffix: str) -> bool:
    if len(prefix) == len(suffix):
        return PREFER_PREFIX_ON_TIE
    return len(prefix) < len(suffix)


def _normalize_target(
    target: ChunkRange[TChunk],
    scope: Scope,
) -> tuple[ChunkRange[TChunk], str]:
    """Read the target's text and bring its boundaries into matcher form.

    The matcher never starts a range at the end of a chunk, nor ends one at
    the start of a chunk, so neither may the target we compare against.
    """
    seeker = TextSeeker(scope())
    seeker.seek_to_chunk(target.end_chunk, target.end_index)
    end = seeker.position
    seeker.seek_to_chunk(target.start_chunk, target.start_index)
    start_chunk, start_index = seeker.current_chunk, seeker.offset_in_chunk
    exact = seeker.read(max(end - seeker.position, 0))
    if not exact:
        return target, exact

    if seeker.offset_in_chunk == 0:
        # Step back into the chunk that the text actually ends in
        seeker.seek_by(-1)
        end_chunk, end_index = seeker.current_chunk, seeker.offset_in_chunk + 1
    else:
        end_chunk, end_index = seeker.current_chunk, seeker.offset_in_chunk
    return ChunkRange(start_chunk, start_index, end_chunk, end_index), exact


def _context_needed(
    target: ChunkRange[TChunk],
    impostor: ChunkRange[TChunk],
    scope: Scope,
    backward: bool,
) -> str | None:
    """Context next to the target that the impostor does not share.

    Walks away from both ranges in step, one code point at a time, and
    returns the text read around the target up to and including the first
    code point that differs. Returns None if the target's side of the scope
    runs out first, since no context on that side can tell them apart.
    """
    target_seeker = TextSeeker(scope())
    impostor_seeker = TextSeeker(scope())
    if backward:
        target_seeker.seek_to_chunk(target.start_chunk, target.start_index)
        impostor_seeker.seek_to_chunk(impostor.start_chunk, impostor.start_index)
    else:
        target_seeker.seek_to_chunk(target.end_chunk, target.end_index)
        impostor_seeker.seek_to_chunk(impostor.end_chunk, impostor.end_index)

    overlap: list[str] = []
    while True:
        try:
            char = read_code_point(target_seeker, backward=backward)
        except BoundaryExhaustedError:
            return None
        overlap.append(char)

        try:
            other = read_code_point(impostor_seeker, backward=backward)
        except BoundaryExhaustedError:
            break
        if other != char:
            break

    if backward:
        overlap.reverse()
    return "".join(overlap)
