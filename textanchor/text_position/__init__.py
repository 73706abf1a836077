"""TextPositionSelector resolution and description."""

from textanchor.text_position.describe import describe_text_position
from textanchor.text_position.match import match_text_position, resolve_text_position

__all__ = ["describe_text_position", "match_text_position", "resolve_text_position"]
