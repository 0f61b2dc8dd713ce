"""Hierarchical step-by-step console reporter for test runs."""

import logging
import time
from collections.abc import Callable
from typing import Any

import typer

from boostsec.step_reporter.diagnostics import extract
from boostsec.step_reporter.events import EventSource
from boostsec.step_reporter.indentation import IndentationTracker
from boostsec.step_reporter.models.events import EventKind
from boostsec.step_reporter.models.failure import Failure
from boostsec.step_reporter.models.scope import Case, RunScope
from boostsec.step_reporter.theme import ColorTheme

logger = logging.getLogger(__name__)

Writer = Callable[[str], Any]
Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Return the current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class StepReporter:
    """Renders runner lifecycle events as indented, timed console lines.

    Suite lines are indented by nesting depth. Each suite records its own
    start and end time; the outermost suite closes with the run's total
    duration instead of an ``end`` marker. Failures are followed by their
    message block and trimmed stack.
    """

    def __init__(
        self,
        runner: EventSource | None = None,
        *,
        theme: ColorTheme | None = None,
        write: Writer = typer.echo,
        clock: Clock = wall_clock_ms,
    ) -> None:
        """Initialize the reporter, attaching to ``runner`` when given."""
        self.theme = theme or ColorTheme()
        self.write = write
        self.clock = clock
        self.indent = IndentationTracker()
        self.handlers: dict[EventKind, Callable[..., None]] = {
            EventKind.START: self._ignore,
            EventKind.SUITE: self.on_suite,
            EventKind.SUITE_END: self.on_suite_end,
            EventKind.HOOK: self._ignore,
            EventKind.HOOK_END: self._ignore,
            EventKind.PENDING: self.on_pending,
            EventKind.TEST: self.on_test,
            EventKind.PASS: self.on_pass,
            EventKind.FAIL: self.on_fail,
            EventKind.RETRYABLE_FAIL: self.on_retryable_fail,
            EventKind.TEST_END: self._ignore,
            EventKind.END: self._ignore,
        }
        if runner is not None:
            self.attach(runner)

    def attach(self, runner: EventSource) -> None:
        """Subscribe every handled event on ``runner``."""
        for kind in self.handlers:
            runner.on(kind.value, self._listener(kind))

    def _listener(self, kind: EventKind) -> Callable[..., None]:
        def listener(*args: Any) -> None:
            self.handle(kind, *args)

        return listener

    def handle(self, event: "EventKind | str", *args: Any) -> None:
        """Render a single event; unknown events and render errors are logged."""
        kind = EventKind.parse(event)
        if kind is None:
            logger.debug(f"Ignoring unknown event: {event!r}")
            return
        try:
            self.handlers[kind](*args)
        except Exception:
            logger.exception(f"Failed to render {kind.value!r} event")

    def _ignore(self, *args: Any) -> None:
        pass

    def _color(self, role: str, text: object) -> str:
        return self.theme.color(role, text)

    def on_suite(self, suite: RunScope) -> None:
        """Print the suite title and open a nested scope."""
        suite.start_time = self.clock()
        self.write(self.indent.prefix() + self._color("suite", suite.title))
        self.indent.enter()

    def on_suite_end(self, suite: RunScope) -> None:
        """Close the scope; the outermost one reports the total duration."""
        depth = self.indent.exit()
        suite.end_time = self.clock()
        start = suite.start_time if suite.start_time is not None else suite.end_time
        suite.total_duration = max(suite.end_time - start, 0)

        if depth > 0:
            text = f"end {suite.title}"
        else:
            text = f"Total Duration ({suite.total_duration}ms)"
        self.write(self.indent.prefix() + self._color("suite", text))

    def on_pending(self, case: Case) -> None:
        """Print a skipped case."""
        self.write(
            self.indent.prefix() + self._color("skipped", f"* skipped {case.title}")
        )

    def on_test(self, case: Case) -> None:
        """Print the start of a case or of one of its retries."""
        if case.retry_count > 0:
            text = f"- retry{case.retry_count} {case.title}"
            line = self._color("bright yellow", text)
        else:
            line = self._color("pending", f"- start {case.title}")
        self.write(self.indent.prefix() + line)

    def on_pass(self, case: Case) -> None:
        """Print a passed case with its duration."""
        ok = self.theme.symbol("ok")
        self.write(
            self.indent.prefix()
            + self._color("bright pass", f"{ok} passed {case.title}")
            + self._color(case.speed, f" ({case.duration}ms)")
        )

    def on_fail(self, case: Case, failure: Failure | None = None) -> None:
        """Print a terminal failure and its diagnostic."""
        self._render_failure("err", "fail", case, failure)

    def on_retryable_fail(self, case: Case, failure: Failure | None = None) -> None:
        """Print a failure that will be retried and its diagnostic."""
        self._render_failure("bang", "bright fail", case, failure)

    def _render_failure(
        self, symbol: str, role: str, case: Case, failure: Failure | None
    ) -> None:
        self.write(
            self.indent.prefix()
            + self._color(role, f"{self.theme.symbol(symbol)} failed {case.title}")
            + self._color("fail", f" ({case.duration}ms)")
        )
        diagnostic = extract(case, failure, self.indent, self.theme)
        self.write(diagnostic.message)
        if diagnostic.stack:
            self.write(diagnostic.stack)
