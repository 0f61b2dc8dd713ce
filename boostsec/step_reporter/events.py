"""Synchronous event source used to drive reporters in-process."""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class EventSource(Protocol):
    """Anything a reporter can subscribe to by event name."""

    def on(self, event: str, callback: Listener) -> Any:
        """Register ``callback`` for ``event``."""


class EventEmitter:
    """Named-event emitter that calls listeners on the emitting thread."""

    def __init__(self) -> None:
        """Initialize with no listeners."""
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, callback: Listener) -> "EventEmitter":
        """Register ``callback`` for ``event`` and return self for chaining."""
        self._listeners[event].append(callback)
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener for ``event`` in registration order.

        Returns:
            True if at least one listener was registered for the event

        """
        listeners = list(self._listeners.get(event, ()))
        logger.debug(f"Emitting {event!r} to {len(listeners)} listener(s)")
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        """Return the number of listeners registered for ``event``."""
        return len(self._listeners.get(event, ()))
