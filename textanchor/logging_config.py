"""
Logging configuration for textanchor

Includes IndentLogger, which draws nested anchoring steps (disambiguation
rounds, seeks inside them) as a tree.
"""

import io
import logging
import sys
from contextlib import contextmanager


class IndentState:
    """Nesting depth shared by all IndentLogger instances"""

    branch = "├── "
    leaf = "└── "
    pipe = "│   "

    depth = 0

    @classmethod
    def prefix(cls, closing: bool = False) -> str:
        """Get the tree prefix for the current depth"""
        if cls.depth == 0:
            return ""
        return cls.pipe * (cls.depth - 1) + (cls.leaf if closing else cls.branch)

    @classmethod
    def reset(cls) -> None:
        """Reset nesting (useful for tests)"""
        cls.depth = 0


class IndentLogger:
    """Logger wrapper that prefixes messages with the current tree depth"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(f"{IndentState.prefix()}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(f"{IndentState.prefix()}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(f"{IndentState.prefix()}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(f"{IndentState.prefix()}{msg}", *args, **kwargs)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @contextmanager
    def indent_block(self, initial_message: str | None = None, closing: str | None = None):
        """
        Context manager that nests all messages logged inside it

        Args:
            initial_message: Optional message to log at block start
            closing: Optional message to log, with a leaf marker, at block end
        """
        if initial_message:
            self.debug(initial_message)
        IndentState.depth += 1
        try:
            yield
        finally:
            if closing:
                self._logger.debug(f"{IndentState.prefix(closing=True)}{closing}")
            IndentState.depth -= 1


def setup_logging(level=logging.INFO):
    """
    Configure logging for textanchor

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("textanchor")
    base_logger.setLevel(level)
    base_logger.handlers = []

    # UTF-8 stream so quoted text with any characters can be logged
    stream = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)8s %(message)s"))
    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


logger = IndentLogger(logging.getLogger("textanchor"))
