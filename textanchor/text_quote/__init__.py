"""TextQuoteSelector matching and description."""

from textanchor.text_quote.describe import describe_text_quote
from textanchor.text_quote.match import match_text_quote

__all__ = ["describe_text_quote", "match_text_quote"]
