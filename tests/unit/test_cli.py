"""Tests for CLI entry point."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from boostsec.step_reporter.cli import app

runner = CliRunner()

PASSING_LOG = """
version: "1"
events:
  - {event: suite, title: Cart, at: 0}
  - {event: test, title: adds items}
  - {event: pass, title: adds items, duration: 12}
  - {event: suite end, title: Cart, at: 25}
"""

FAILING_LOG = """
version: "1"
events:
  - {event: suite, title: Cart, at: 0}
  - event: fail
    title: adds items
    duration: 4
    error: {message: boom, stack: "Error: boom\\n    at add (cart.py:3)"}
  - {event: suite end, title: Cart, at: 9}
"""


@pytest.fixture(autouse=True)
def _no_color_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure NO_COLOR from the host doesn't leak into tests."""
    monkeypatch.delenv("NO_COLOR", raising=False)


def _write(tmp_path: Path, content: str, name: str = "events.yaml") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


def test_replay_success(tmp_path: Path) -> None:
    """replay prints the report and exits 0 when nothing failed."""
    result = runner.invoke(
        app, ["replay", str(_write(tmp_path, PASSING_LOG)), "--no-color"]
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Cart",
        "  - start adds items",
        "  ✓ passed adds items (12ms)",
        "Total Duration (25ms)",
    ]


def test_replay_failure_exit_code(tmp_path: Path) -> None:
    """replay exits 1 when the log contains a terminal failure."""
    result = runner.invoke(
        app, ["replay", str(_write(tmp_path, FAILING_LOG)), "--no-color"]
    )

    assert result.exit_code == 1
    lines = result.stdout.splitlines()
    assert lines[1] == "  ✖ failed adds items (4ms)"
    assert lines[2] == "Error: boom"
    assert lines[3] == "    at add (cart.py:3)"


def test_replay_missing_file(tmp_path: Path) -> None:
    """replay reports a missing event log."""
    result = runner.invoke(app, ["replay", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Event log not found" in result.output


def test_replay_invalid_config(tmp_path: Path) -> None:
    """replay reports an invalid config file."""
    config = _write(tmp_path, "slow: -1\n", name="reporter.yaml")

    result = runner.invoke(
        app,
        ["replay", str(_write(tmp_path, PASSING_LOG)), "--config", str(config)],
    )

    assert result.exit_code == 1
    assert "Invalid config schema" in result.output


def test_replay_unmatched_suite_end(tmp_path: Path) -> None:
    """replay exits 1 for a log with an unmatched suite end."""
    log = _write(tmp_path, 'version: "1"\nevents:\n  - {event: suite end}\n')

    result = runner.invoke(app, ["replay", str(log), "--no-color"])

    assert result.exit_code == 1
    assert "without a matching 'suite'" in result.output


def test_replay_color_forced(tmp_path: Path) -> None:
    """--color keeps ANSI styling even when output is not a terminal."""
    result = runner.invoke(
        app, ["replay", str(_write(tmp_path, PASSING_LOG)), "--color"]
    )

    assert result.exit_code == 0
    assert "\x1b[" in result.stdout


def test_replay_config_file_symbols(tmp_path: Path) -> None:
    """Config file settings reach the reporter."""
    config = _write(
        tmp_path, "use_color: false\nsymbols: windows\n", name="reporter.yaml"
    )

    result = runner.invoke(
        app,
        ["replay", str(_write(tmp_path, PASSING_LOG)), "--config", str(config)],
    )

    assert result.exit_code == 0
    assert "  √ passed adds items (12ms)" in result.stdout.splitlines()


def test_replay_verbose_logs_debug(tmp_path: Path) -> None:
    """--verbose lowers the root logger to DEBUG."""
    root = logging.getLogger()
    previous = root.level
    try:
        result = runner.invoke(
            app,
            ["replay", str(_write(tmp_path, PASSING_LOG)), "--no-color", "-v"],
        )
        assert result.exit_code == 0
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
