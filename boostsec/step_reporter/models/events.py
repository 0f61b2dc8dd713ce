"""Lifecycle event kinds emitted by a test runner."""

from enum import Enum


class EventKind(str, Enum):
    """Runner events the step reporter subscribes to."""

    START = "start"
    SUITE = "suite"
    SUITE_END = "suite end"
    HOOK = "hook"
    HOOK_END = "hook end"
    PENDING = "pending"
    TEST = "test"
    PASS = "pass"
    FAIL = "fail"
    RETRYABLE_FAIL = "retryable fail"
    TEST_END = "test end"
    END = "end"

    @classmethod
    def parse(cls, name: "str | EventKind") -> "EventKind | None":
        """Return the kind for ``name``, or None when it is not a known event."""
        try:
            return cls(name)
        except ValueError:
            return None
