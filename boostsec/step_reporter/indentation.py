"""Nesting depth tracking for indented console output."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

INDENT_UNIT = "  "


class IndentationTracker:
    """Depth counter owned by a single reporter instance."""

    def __init__(self) -> None:
        """Start at depth zero."""
        self.depth = 0

    def enter(self) -> int:
        """Increase depth by one and return the new depth."""
        self.depth += 1
        return self.depth

    def exit(self) -> int:
        """Decrease depth by one, never below zero, and return the new depth."""
        if self.depth == 0:
            logger.warning("Scope exit without matching enter; depth stays at 0")
            return 0
        self.depth -= 1
        return self.depth

    def prefix(self) -> str:
        """Return the whitespace prefix for the current depth."""
        return INDENT_UNIT * self.depth

    @contextmanager
    def nested(self, levels: int = 1) -> Iterator["IndentationTracker"]:
        """Temporarily indent ``levels`` deeper, restoring the saved depth."""
        saved = self.depth
        self.depth += levels
        try:
            yield self
        finally:
            self.depth = saved
