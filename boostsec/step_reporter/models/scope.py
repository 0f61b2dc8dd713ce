"""Models for suites and test cases as seen by the step reporter."""

from typing import Literal

from pydantic import BaseModel, Field

from boostsec.step_reporter.models.failure import Failure

SpeedClass = Literal["slow", "medium", "fast"]

DEFAULT_SLOW_MS = 75


class RunScope(BaseModel):
    """A suite nesting level, timed between its enter and exit events."""

    title: str = Field(..., description="Suite title")
    start_time: int | None = Field(
        default=None, description="Wall-clock ms captured on suite enter"
    )
    end_time: int | None = Field(
        default=None, description="Wall-clock ms captured on suite exit"
    )
    total_duration: int | None = Field(
        default=None, description="Elapsed ms between enter and exit"
    )


class Case(BaseModel):
    """A single test execution within a suite."""

    title: str = Field(..., description="Test title")
    duration: int = Field(default=0, ge=0, description="Execution time in ms")
    retry_count: int = Field(
        default=0, ge=0, description="Zero on first attempt, N on the Nth retry"
    )
    speed: SpeedClass = Field(
        default="fast", description="Speed class used to pick the duration color"
    )
    err: Failure | None = Field(
        default=None, description="Last failure the runner recorded on the test"
    )


def classify_speed(duration: int, slow: int = DEFAULT_SLOW_MS) -> SpeedClass:
    """Classify a duration against a slow threshold.

    Anything over ``slow`` is slow, anything over half of it is medium.
    """
    if duration > slow:
        return "slow"
    if duration > slow / 2:
        return "medium"
    return "fast"
