"""
Step definitions for anchoring annotations in chunked text.

Covers resolving annotation YAML with locate() and describing spans with
describe_text_quote().
"""

import re

from behave import given, then, use_step_matcher, when  # type: ignore[import-untyped]

from textanchor.chunker import iter_chunks
from textanchor.errors import InvalidSelectorError
from textanchor.seek import TextSeeker
from textanchor.selectors import TextPositionSelector, selector_from_annotation
from textanchor.sources import TextChunkSource
from textanchor.text_position import resolve_text_position
from textanchor.text_quote import describe_text_quote, match_text_quote

use_step_matcher("re")


def _unit_positions(source, found):
    """Code unit offsets of a range's boundary points."""
    seeker = TextSeeker(source())
    seeker.seek_to_chunk(found.start_chunk, found.start_index)
    start = seeker.position
    seeker.seek_to_chunk(found.end_chunk, found.end_index)
    return start, seeker.position


# === Setup ===


@given(r"the chunks (?P<texts>.+)")  # type: ignore[misc]
def step_given_chunks(context, texts):
    """Split quoted strings into one chunk each."""
    context.source = TextChunkSource(re.findall(r'"([^"]*)"', texts))


@given(r"annotation:")  # type: ignore[misc]
def step_given_annotation(context):
    """Parse annotation from YAML format."""
    context.selector = selector_from_annotation(context.text)


# === Actions ===


@when(r"I resolve the annotation")  # type: ignore[misc]
def step_when_resolve(context):
    """Resolve annotation against the chunks using selector.locate()."""
    context.result = context.selector.locate(context.source)


@when(r"I describe the span from (?P<start>\d+) to (?P<end>\d+)")  # type: ignore[misc]
def step_when_describe(context, start, end):
    """Describe the span between two code point offsets as a quote."""
    position = TextPositionSelector(start=int(start), end=int(end))
    context.target = resolve_text_position(position, context.source())
    try:
        context.selector = describe_text_quote(context.target, context.source)
    except InvalidSelectorError as e:
        context.error = e


# === Assertions ===


@then(r"the result is (?P<status>FOUND|ORPHANED|AMBIGUOUS)")  # type: ignore[misc]
def step_then_status(context, status):
    """Assert the status of the match result."""
    actual = context.result.status.value.upper()
    assert actual == status, f"Expected {status} but got {actual}"


@then(r"exactly (?P<count>\d+) match is found")  # type: ignore[misc]
def step_then_exact_matches(context, count):
    """Assert exact number of matches."""
    assert len(context.result.matches) == int(count), (
        f"Expected {count} matches but got {len(context.result.matches)}"
    )


@then(r"the match starts at code unit (?P<start>\d+) and ends at code unit (?P<end>\d+)")  # type: ignore[misc]
def step_then_match_positions(context, start, end):
    """Assert where the single match lies."""
    actual = _unit_positions(context.source, context.result.match.range)
    assert actual == (int(start), int(end)), f"Expected ({start}, {end}) but got {actual}"


@then(r'the matched text is "(?P<text>[^"]*)"')  # type: ignore[misc]
def step_then_matched_text(context, text):
    """Assert the text of the single match."""
    actual = context.result.match.matched_text
    assert actual == text, f"Expected '{text}' but got '{actual}'"


@then(r'the described selector has exact "(?P<exact>[^"]*)"')  # type: ignore[misc]
def step_then_described_exact(context, exact):
    """Assert the quoted text of the described selector."""
    assert context.selector.exact == exact, (
        f"Expected exact '{exact}' but got '{context.selector.exact}'"
    )


@then(r'the described selector has prefix "(?P<prefix>[^"]*)" and suffix "(?P<suffix>[^"]*)"')  # type: ignore[misc]
def step_then_described_context(context, prefix, suffix):
    """Assert the context the describer chose."""
    actual = (context.selector.prefix, context.selector.suffix)
    assert actual == (prefix, suffix), f"Expected {(prefix, suffix)!r} but got {actual!r}"


@then(r"resolving the described selector finds only that span")  # type: ignore[misc]
def step_then_round_trip(context):
    """Assert the described selector matches nothing but its target."""
    matches = list(match_text_quote(context.selector, iter_chunks(context.source())))
    assert matches == [context.target], f"Expected only the target but got {matches}"


@then(r"describing fails with an invalid selector")  # type: ignore[misc]
def step_then_describe_fails(context):
    """Assert the describer refused the span."""
    assert isinstance(getattr(context, "error", None), InvalidSelectorError), (
        "Expected an InvalidSelectorError"
    )
