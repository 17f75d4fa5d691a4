"""Append-only notification log for registry events.

The registry appends one event per committed state change.  External
consumers either read the recorded history (`events()`) or register a
callback with `subscribe()` to be told about new events as they happen.

Subscribers run synchronously, in registration order, after the event
is recorded.  The state change that produced the event has already been
applied by then, so a failing subscriber is logged and skipped rather
than allowed to surface as a failure of the registry operation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from app.models.events import RegistryEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[RegistryEvent], None]


@runtime_checkable
class EventSink(Protocol):
    def append(self, event: RegistryEvent) -> None: ...


class EventLog:
    """In-memory event log with synchronous subscribers."""

    def __init__(self) -> None:
        self._events: list[RegistryEvent] = []
        self._subscribers: list[Subscriber] = []

    def append(self, event: RegistryEvent) -> None:
        self._events.append(event)
        logger.debug("Event recorded name=%s seq=%d", event.name, len(self._events))

        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Event subscriber failed name=%s subscriber=%r",
                    event.name,
                    callback,
                )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def clear(self) -> None:
        """Forget recorded events and subscribers."""
        self._events.clear()
        self._subscribers.clear()

    def events(self) -> list[RegistryEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
