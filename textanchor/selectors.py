"""
W3C Web Annotation selectors for chunked text.

This module provides the TextQuoteSelector and TextPositionSelector wire
shapes, their YAML annotation form, and ``locate()`` to resolve them
against a scope.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Self

import yaml
from pydantic import BaseModel

from textanchor.chunker import ChunkRange
from textanchor.config import SELECTOR_TYPE_POSITION, SELECTOR_TYPE_QUOTE
from textanchor.errors import BoundaryExhaustedError, InvalidSelectorError


class MatchStatus(str, Enum):
    """Status of a selector match attempt."""

    FOUND = "found"
    ORPHANED = "orphaned"
    AMBIGUOUS = "ambiguous"


@dataclass
class Match:
    """
    A single match location in the scope.

    Attributes:
        range: Chunk range covering the matched text
        matched_text: The text that was matched
    """

    range: ChunkRange[Any]
    matched_text: str = ""


@dataclass
class MatchResult:
    """
    Result of locating a selector in a scope.

    Use the boolean properties for clean result handling:

        result = selector.locate(text)
        if result.found:
            print(result.match.matched_text)
        elif result.ambiguous:
            print(f"Found {len(result.matches)} matches")
        elif result.orphaned:
            print("Not found")
    """

    status: MatchStatus
    matches: list[Match] = field(default_factory=list)

    @classmethod
    def from_matches(cls, matches: list[Match]) -> MatchResult:
        if not matches:
            return cls(status=MatchStatus.ORPHANED)
        if len(matches) == 1:
            return cls(status=MatchStatus.FOUND, matches=matches)
        return cls(status=MatchStatus.AMBIGUOUS, matches=matches)

    @property
    def found(self) -> bool:
        """True if exactly one match was found."""
        return self.status == MatchStatus.FOUND

    @property
    def orphaned(self) -> bool:
        """True if no match was found."""
        return self.status == MatchStatus.ORPHANED

    @property
    def ambiguous(self) -> bool:
        """True if multiple matches were found."""
        return self.status == MatchStatus.AMBIGUOUS

    @property
    def match(self) -> Match | None:
        """The first match (the only one when found=True)."""
        return self.matches[0] if self.matches else None


def _selector_data(yaml_text: str) -> dict[str, Any]:
    """Get the target.selector mapping out of annotation YAML."""
    data = yaml.safe_load(yaml_text) or {}
    if not isinstance(data, dict):
        raise InvalidSelectorError("annotation must be a YAML mapping")
    target = data.get("target") or {}
    if not isinstance(target, dict):
        raise InvalidSelectorError("target must be a mapping")
    selector_data = target.get("selector") or {}
    if not isinstance(selector_data, dict):
        raise InvalidSelectorError("target.selector must be a mapping")
    return selector_data


def _dump_annotation(selector_data: dict[str, Any]) -> str:
    return yaml.safe_dump(
        {"target": {"selector": selector_data}},
        allow_unicode=True,
        sort_keys=False,
    )


class TextQuoteSelector(BaseModel):
    """
    W3C Web Annotation TextQuoteSelector.

    Selects text by an exact quote with optional prefix/suffix context. The
    prefix and suffix make the selector unique when the quote itself
    appears more than once.

    Example:
        selector = TextQuoteSelector(exact="World", suffix="! ")
        result = selector.locate(["Hello ", "World", "! Hello World!"])
        if result.found:
            print(result.match.range)

    Attributes:
        type: Selector type identifier (always "TextQuoteSelector")
        exact: The exact text to match
        prefix: Text that must appear right before the exact match
        suffix: Text that must appear right after the exact match
    """

    type: str = SELECTOR_TYPE_QUOTE
    exact: str
    prefix: str = ""
    suffix: str = ""

    @classmethod
    def from_annotation(cls, yaml_text: str) -> Self:
        """
        Load a TextQuoteSelector from W3C Web Annotation YAML.

        Example:
            selector = TextQuoteSelector.from_annotation('''
                target:
                  selector:
                    type: TextQuoteSelector
                    exact: "World"
                    suffix: "! "
            ''')
        """
        selector_data = _selector_data(yaml_text)
        return cls(
            exact=str(selector_data.get("exact") or ""),
            prefix=str(selector_data.get("prefix") or ""),
            suffix=str(selector_data.get("suffix") or ""),
        )

    def to_annotation(self) -> str:
        """Dump as annotation YAML, leaving out empty prefix and suffix."""
        selector_data = self.model_dump()
        for name in ("prefix", "suffix"):
            if not selector_data[name]:
                del selector_data[name]
        return _dump_annotation(selector_data)

    def locate(self, source: Any) -> MatchResult:
        """
        Locate this selector in a scope.

        Args:
            source: Text string, list of chunk strings, lxml element, or a
                factory returning fresh chunkers (see ``as_scope``)

        Returns:
            MatchResult with status and every match in document order

        Raises:
            InvalidSelectorError: If ``exact`` is empty
        """
        from textanchor.chunker import iter_chunks
        from textanchor.sources import as_scope
        from textanchor.text_quote.match import match_text_quote

        scope = as_scope(source)
        matches = [
            Match(range=found, matched_text=self.exact)
            for found in match_text_quote(self, iter_chunks(scope()))
        ]
        return MatchResult.from_matches(matches)


class TextPositionSelector(BaseModel):
    """
    W3C Web Annotation TextPositionSelector.

    Selects text by the code point offsets of its start and end, counted
    from the start of the scope.

    Attributes:
        type: Selector type identifier (always "TextPositionSelector")
        start: Offset of the first selected code point
        end: Offset just past the last selected code point
    """

    type: str = SELECTOR_TYPE_POSITION
    start: int
    end: int

    @classmethod
    def from_annotation(cls, yaml_text: str) -> Self:
        """Load a TextPositionSelector from W3C Web Annotation YAML."""
        selector_data = _selector_data(yaml_text)
        try:
            return cls(start=int(selector_data["start"]), end=int(selector_data["end"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSelectorError(
                "TextPositionSelector needs integer 'start' and 'end'"
            ) from e

    def to_annotation(self) -> str:
        return _dump_annotation(self.model_dump())

    def locate(self, source: Any) -> MatchResult:
        """
        Locate this selector in a scope.

        An offset beyond the end of the scope makes the result ORPHANED.

        Raises:
            InvalidSelectorError: If an offset is negative or end < start
        """
        from textanchor.seek import read_range
        from textanchor.sources import as_scope
        from textanchor.text_position.match import resolve_text_position

        scope = as_scope(source)
        try:
            found = resolve_text_position(self, scope())
        except BoundaryExhaustedError:
            return MatchResult.from_matches([])
        return MatchResult.from_matches(
            [Match(range=found, matched_text=read_range(found, scope()))]
        )


Selector = TextQuoteSelector | TextPositionSelector


def selector_from_annotation(yaml_text: str) -> Selector:
    """
    Load whichever selector an annotation carries, by its ``type``.

    Raises:
        InvalidSelectorError: For a missing or unsupported selector type
    """
    selector_type = _selector_data(yaml_text).get("type")
    if selector_type == SELECTOR_TYPE_QUOTE:
        return TextQuoteSelector.from_annotation(yaml_text)
    if selector_type == SELECTOR_TYPE_POSITION:
        return TextPositionSelector.from_annotation(yaml_text)
    raise InvalidSelectorError(f"unsupported selector type {selector_type!r}")
