"""Shared configuration for textanchor."""

from textanchor.errors import InvalidSelectorError

# W3C Web Annotation selector type names
SELECTOR_TYPE_QUOTE = "TextQuoteSelector"
SELECTOR_TYPE_POSITION = "TextPositionSelector"

# When a prefix and a suffix would disambiguate equally well, take the prefix
PREFER_PREFIX_ON_TIE = True

# Encoding used when reading text and annotation files
DEFAULT_ENCODING = "utf-8"


def validate_quote_selector(exact: str, prefix: str = "", suffix: str = "") -> None:
    """Validate the fields of a quote selector.

    Args:
        exact: The quoted text
        prefix: Context expected before the quote
        suffix: Context expected after the quote

    Raises:
        InvalidSelectorError: If the quote is empty
    """
    if not exact:
        raise InvalidSelectorError("'exact' must not be empty")
    if prefix is None or suffix is None:
        raise InvalidSelectorError("'prefix' and 'suffix' must be strings")


def validate_position_selector(start: int, end: int) -> None:
    """Validate the offsets of a position selector.

    Args:
        start: Code point offset of the start of the span
        end: Code point offset of the end of the span

    Raises:
        InvalidSelectorError: If an offset is negative or end < start
    """
    if start < 0 or end < 0:
        raise InvalidSelectorError(
            f"offsets must not be negative (start={start}, end={end})"
        )
    if end < start:
        raise InvalidSelectorError(f"end ({end}) lies before start ({start})")
