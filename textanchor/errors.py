"""Exceptions raised while anchoring selectors to chunked text."""

from __future__ import annotations

from typing import Any


class AnchoringError(Exception):
    """Base class for all anchoring failures."""


class BoundaryExhaustedError(AnchoringError, IndexError):
    """Raised when a seek or read runs past the first or last chunk."""

    def __init__(self, target: int, position: int) -> None:
        """Initialize the error.

        Args:
            target: The position the seeker was asked to reach
            position: The position where the seeker stopped
        """
        self.target = target
        self.position = position
        super().__init__(
            f"Chunks exhausted before seek ended: "
            f"target {target}, stopped at {position}"
        )


class InvalidSelectorError(AnchoringError, ValueError):
    """Raised for selectors that cannot be resolved at all."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid selector: {reason}")


class AmbiguousTargetError(AnchoringError):
    """Raised when no prefix or suffix can tell the target apart."""

    def __init__(self, selector: Any, match: Any) -> None:
        """Initialize the error.

        Args:
            selector: The quote selector that still matched twice
            match: The other range the selector could not be separated from
        """
        self.selector = selector
        self.match = match
        super().__init__(
            f"Target cannot be disambiguated from another occurrence of "
            f"{selector.exact!r}; widen the scope to include more context"
        )
