"""Tests for event kinds."""

import pytest

from boostsec.step_reporter.models.events import EventKind


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("suite", EventKind.SUITE),
        ("suite end", EventKind.SUITE_END),
        ("retryable fail", EventKind.RETRYABLE_FAIL),
        ("hook end", EventKind.HOOK_END),
        (EventKind.PASS, EventKind.PASS),
    ],
)
def test_parse_known(name: str, expected: EventKind) -> None:
    """EventKind.parse maps runner event names to kinds."""
    assert EventKind.parse(name) is expected


def test_parse_unknown() -> None:
    """EventKind.parse returns None for unknown names."""
    assert EventKind.parse("waiting") is None
