"""Load recorded runner event streams and replay them through a reporter."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from boostsec.step_reporter.events import EventEmitter
from boostsec.step_reporter.models.events import EventKind
from boostsec.step_reporter.models.failure import Failure
from boostsec.step_reporter.models.scope import (
    DEFAULT_SLOW_MS,
    Case,
    RunScope,
    classify_speed,
)
from boostsec.step_reporter.reporter import StepReporter, wall_clock_ms

logger = logging.getLogger(__name__)

CASE_EVENTS = {
    EventKind.PENDING,
    EventKind.TEST,
    EventKind.PASS,
    EventKind.FAIL,
    EventKind.RETRYABLE_FAIL,
    EventKind.TEST_END,
    EventKind.HOOK,
    EventKind.HOOK_END,
}
FAILURE_EVENTS = {EventKind.FAIL, EventKind.RETRYABLE_FAIL}


class RecordedFailure(BaseModel):
    """Error payload as recorded in an event log."""

    message: str | None = Field(default=None, description="Error message")
    stack: str | None = Field(default=None, description="Stack text")
    actual: Any = Field(default=None, description="Received value")
    expected: Any = Field(default=None, description="Expected value")
    show_diff: bool = Field(default=True, description="Render actual/expected diff")
    uncaught: bool = Field(default=False, description="Raised outside a test")

    def to_failure(self) -> Failure:
        """Convert to a Failure, keeping only the fields that were recorded."""
        return Failure(**self.model_dump(include=self.model_fields_set))


class RecordedEvent(BaseModel):
    """A single runner event in an event log."""

    event: EventKind = Field(..., description="Event name")
    title: str = Field(default="", description="Suite or test title")
    duration: int = Field(default=0, ge=0, description="Test duration in ms")
    retry_count: int = Field(default=0, ge=0, description="Current retry number")
    slow: int | None = Field(
        default=None, gt=0, description="Slow threshold in ms for this test"
    )
    at: int | None = Field(
        default=None, description="Wall-clock ms when the event was emitted"
    )
    error: RecordedFailure | None = Field(
        default=None, description="Failure for fail and retryable fail events"
    )


class EventLog(BaseModel):
    """Complete recorded event stream."""

    version: str = Field(..., description="Event log schema version")
    events: list[RecordedEvent] = Field(
        default_factory=list, description="Events in dispatch order"
    )


class ReplayResult(BaseModel):
    """Counts gathered while replaying an event log."""

    passed: int = 0
    failed: int = 0
    retried: int = 0
    skipped: int = 0


def load_event_log(path: Path) -> EventLog:
    """Load an event log from a YAML or JSON file.

    Args:
        path: Path to the recorded event log

    Returns:
        Parsed event log

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not path.exists():
        raise FileNotFoundError(f"Event log not found: {path}")

    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty event log: {path}")

    try:
        return EventLog.model_validate(data)
    except Exception as e:
        raise ValueError(f"Invalid event log schema in {path}: {e}") from e


class _ReplayClock:
    """Returns the last recorded time, or wall-clock time for unrecorded logs.

    Once a log carries any ``at`` value, records without one reuse the most
    recent recorded time, starting from the first one in the log.
    """

    def __init__(self, first: int | None = None) -> None:
        self.current = first

    def advance(self, at: int | None) -> None:
        if at is not None:
            self.current = at

    def __call__(self) -> int:
        if self.current is not None:
            return self.current
        return wall_clock_ms()


def replay(
    log: EventLog,
    reporter: StepReporter,
    default_slow: int = DEFAULT_SLOW_MS,
) -> ReplayResult:
    """Replay ``log`` through ``reporter`` in recorded order.

    Suite enter and exit records are paired by nesting, so both events see the
    same RunScope.

    Raises:
        ValueError: If a suite end has no open suite

    """
    emitter = EventEmitter()
    clock = _ReplayClock(
        next((record.at for record in log.events if record.at is not None), None)
    )
    reporter.clock = clock
    reporter.attach(emitter)

    result = ReplayResult()
    open_suites: list[RunScope] = []

    for position, record in enumerate(log.events):
        clock.advance(record.at)
        kind = record.event

        if kind == EventKind.SUITE:
            scope = RunScope(title=record.title)
            open_suites.append(scope)
            emitter.emit(kind.value, scope)
        elif kind == EventKind.SUITE_END:
            if not open_suites:
                raise ValueError(
                    f"Event {position}: 'suite end' without a matching 'suite'"
                )
            emitter.emit(kind.value, open_suites.pop())
        elif kind in CASE_EVENTS:
            case = _build_case(record, default_slow)
            if kind in FAILURE_EVENTS:
                emitter.emit(kind.value, case, case.err)
            else:
                emitter.emit(kind.value, case)
            _count(result, kind)
        else:
            emitter.emit(kind.value)

    if open_suites:
        logger.warning(f"{len(open_suites)} suite(s) never ended in the event log")
    return result


def _build_case(record: RecordedEvent, default_slow: int) -> Case:
    slow = record.slow or default_slow
    return Case(
        title=record.title,
        duration=record.duration,
        retry_count=record.retry_count,
        speed=classify_speed(record.duration, slow),
        err=record.error.to_failure() if record.error else None,
    )


def _count(result: ReplayResult, kind: EventKind) -> None:
    if kind == EventKind.PASS:
        result.passed += 1
    elif kind == EventKind.FAIL:
        result.failed += 1
    elif kind == EventKind.RETRYABLE_FAIL:
        result.retried += 1
    elif kind == EventKind.PENDING:
        result.skipped += 1
