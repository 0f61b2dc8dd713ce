"""Model for the error value attached to failing and retrying tests."""

import traceback
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

MessageSource = Literal["message", "inspect", "none"]


class Failure(BaseModel):
    """Error-like value reported with a fail or retryable fail event.

    ``actual`` and ``expected`` only count as present when they were set
    explicitly, so ``None`` is a legitimate compared value.
    """

    message: str | None = Field(default=None, description="Human message")
    stack: str | None = Field(
        default=None, description="Stack text, header line first then frames"
    )
    inspect: Callable[[], str] | None = Field(
        default=None, description="Fallback producing a message when none is set"
    )
    actual: Any = Field(default=None, description="Value the assertion received")
    expected: Any = Field(default=None, description="Value the assertion wanted")
    show_diff: bool = Field(default=True, description="Render actual/expected diff")
    uncaught: bool = Field(default=False, description="Raised outside a test body")

    @property
    def message_source(self) -> MessageSource:
        """Which field the display message is taken from."""
        if self.message:
            return "message"
        if self.inspect is not None:
            return "inspect"
        return "none"

    @property
    def has_diff_values(self) -> bool:
        """Whether both ``actual`` and ``expected`` were provided."""
        return {"actual", "expected"} <= self.model_fields_set

    @classmethod
    def from_exception(cls, exc: BaseException, uncaught: bool = False) -> "Failure":
        """Build a Failure from a raised exception.

        The stack is laid out as ``"<TypeName>: <message>"`` followed by the
        formatted frames, so the header can be trimmed off cleanly.
        """
        message = str(exc)
        header = f"{type(exc).__name__}: {message}" if message else type(exc).__name__
        frames = "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n")
        stack = f"{header}\n{frames}" if frames else header

        data: dict[str, Any] = {
            "message": message or None,
            "stack": stack,
            "uncaught": uncaught,
        }
        for attr in ("actual", "expected"):
            if hasattr(exc, attr):
                data[attr] = getattr(exc, attr)
        if hasattr(exc, "show_diff"):
            data["show_diff"] = bool(exc.show_diff)  # type: ignore[attr-defined]
        return cls(**data)
