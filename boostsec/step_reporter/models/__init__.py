"""Data models for runner events, suites, test cases and failures."""

from boostsec.step_reporter.models.events import EventKind
from boostsec.step_reporter.models.failure import Failure
from boostsec.step_reporter.models.scope import (
    Case,
    RunScope,
    SpeedClass,
    classify_speed,
)

__all__ = [
    "Case",
    "EventKind",
    "Failure",
    "RunScope",
    "SpeedClass",
    "classify_speed",
]
