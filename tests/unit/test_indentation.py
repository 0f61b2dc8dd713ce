"""Tests for indentation tracking."""

from boostsec.step_reporter.indentation import IndentationTracker


def test_prefix_empty_at_depth_zero() -> None:
    """prefix is empty before any scope is entered."""
    assert IndentationTracker().prefix() == ""


def test_enter_and_exit_adjust_prefix() -> None:
    """Each level adds two spaces and exit removes them."""
    indent = IndentationTracker()
    assert indent.enter() == 1
    assert indent.enter() == 2
    assert indent.prefix() == "    "
    assert indent.exit() == 1
    assert indent.prefix() == "  "


def test_exit_clamps_at_zero() -> None:
    """exit without a matching enter never goes negative."""
    indent = IndentationTracker()
    assert indent.exit() == 0
    assert indent.depth == 0
    assert indent.prefix() == ""


def test_nested_restores_depth() -> None:
    """nested raises depth temporarily and restores it afterwards."""
    indent = IndentationTracker()
    indent.enter()
    with indent.nested(2):
        assert indent.depth == 3
        assert indent.prefix() == "      "
    assert indent.depth == 1


def test_nested_restores_depth_on_error() -> None:
    """nested restores depth even when the body raises."""
    indent = IndentationTracker()
    try:
        with indent.nested():
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert indent.depth == 0


def test_trackers_are_independent() -> None:
    """Two trackers never share depth."""
    first = IndentationTracker()
    second = IndentationTracker()
    first.enter()
    assert second.depth == 0
