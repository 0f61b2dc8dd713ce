"""Turn failure values into a readable message block and a trimmed stack."""

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from boostsec.step_reporter.indentation import IndentationTracker
from boostsec.step_reporter.models.failure import Failure
from boostsec.step_reporter.models.scope import Case
from boostsec.step_reporter.theme import ColorTheme

_ERROR_TYPE_RE = re.compile(r"^([^:]+): expected")


class Diagnostic(BaseModel):
    """Rendered diagnostic for a failed or retrying test."""

    message: str = Field(..., description="Message block, with diff when shown")
    stack: str = Field(..., description="Stack text with the message removed")


def resolve_message(failure: Failure) -> str:
    """Return the best human message for ``failure``.

    Prefers ``message``, then ``inspect()``, then the empty string.
    """
    source = failure.message_source
    if source == "message":
        return str(failure.message)
    if source == "inspect" and failure.inspect is not None:
        return str(failure.inspect())
    return ""


def resolve_stack(failure: Failure, message: str | None = None) -> str:
    """Return the stack text, falling back to the display message."""
    if message is None:
        message = resolve_message(failure)
    return failure.stack or message


def _find_message(stack: str, message: str) -> int:
    # First occurrence only; a message repeated inside a frame path can match
    # early.
    if not message:
        return -1
    return stack.find(message)


def _type_tag(value: Any) -> Any:
    # bool is an int subclass but never compares as a number here
    if isinstance(value, bool):
        return bool
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list | tuple):
        return "array"
    return type(value)


def same_type(a: Any, b: Any) -> bool:
    """Return True when ``a`` and ``b`` are the same kind of value.

    Numbers, mappings and sequences compare by kind; anything else needs the
    exact same type.
    """
    return _type_tag(a) == _type_tag(b)


def _canonicalize(value: Any, seen: set[int]) -> Any:
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping | list | tuple | set | frozenset):
        if id(value) in seen:
            return "[Circular]"
        seen = seen | {id(value)}
    if isinstance(value, Mapping):
        # Non-text keys use repr so 1 and "1" stay distinct entries
        if all(isinstance(k, str) for k in value):
            return {k: _canonicalize(v, seen) for k, v in value.items()}
        return {repr(k): _canonicalize(v, seen) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_canonicalize(v, seen) for v in value]
    if isinstance(value, set | frozenset):
        return sorted((_canonicalize(v, seen) for v in value), key=repr)
    return value


def stringify(value: Any) -> str:
    """Return stable, comparable text for ``value``.

    Strings are returned as-is. Everything else becomes two-space indented
    JSON with sorted keys, using ``repr`` for values JSON cannot encode.
    """
    if isinstance(value, str):
        return value
    return json.dumps(
        _canonicalize(value, set()),
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
        default=repr,
    )


def _should_show_diff(failure: Failure) -> bool:
    return (
        failure.show_diff is not False
        and failure.has_diff_values
        and same_type(failure.actual, failure.expected)
    )


def format_message(
    failure: Failure, indent: IndentationTracker, theme: ColorTheme
) -> str:
    """Render the message block for ``failure``.

    The block runs up to and including the first occurrence of the message in
    the stack, which keeps any ``TypeName:`` prefix the stack adds. When a
    diff applies, the block becomes an indented header, a legend and the
    actual/expected values.
    """
    message = resolve_message(failure)
    stack = resolve_stack(failure, message)

    index = _find_message(stack, message)
    if index == -1:
        msg = message
    else:
        msg = stack[: index + len(message)]

    if failure.uncaught:
        msg = "Uncaught " + msg

    if not _should_show_diff(failure):
        return msg

    actual = stringify(failure.actual)
    expected = stringify(failure.expected)
    match = _ERROR_TYPE_RE.match(message)

    with indent.nested(1):
        block = indent.prefix() + theme.color(
            "error message", match.group(1) if match else msg
        )
    with indent.nested(2):
        block += (
            "\n"
            + indent.prefix()
            + theme.color("diff removed", "actual")
            + " | "
            + theme.color("diff added", "expected")
        )
        block += (
            "\n"
            + indent.prefix()
            + theme.color("diff removed", actual)
            + " | "
            + theme.color("diff added", expected)
            + "\n"
        )
    return block


def format_stack(failure: Failure) -> str:
    """Return the stack with the message and everything before it removed.

    Exactly one separator character after the message is dropped, so the
    result starts at the first frame.
    """
    message = resolve_message(failure)
    stack = resolve_stack(failure, message)

    index = _find_message(stack, message)
    if index != -1:
        stack = stack[index + len(message) + 1 :]
    return stack


def extract(
    case: Case,
    failure: Failure | None,
    indent: IndentationTracker,
    theme: ColorTheme,
) -> Diagnostic:
    """Build the diagnostic for ``case``, using its own error when none is given."""
    if failure is None:
        failure = case.err or Failure()
    return Diagnostic(
        message=format_message(failure, indent, theme),
        stack=format_stack(failure),
    )
