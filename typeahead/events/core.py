"""A simple, thread-safe event bus.

This module provides a decoupled way for components to report what they are
doing. It supports:
- Publishing events, kept in a bounded history.
- Querying the history by type and time.
- Subscribing callbacks that run synchronously in the publisher's thread.
"""

import threading
import time
from collections import deque
from collections.abc import Callable
from typing import Any

from pydantic import Field

from ..common.pydantic import FrozenBaseModel


class Event(FrozenBaseModel):
    """Base class for all events, stamped with the publication time."""

    event_t: int = Field(default_factory=time.time_ns)


class EventBus:
    """Event bus implementation."""

    def __init__(self, history_size: int) -> None:
        """Initialize the event bus."""
        self._events: deque[Event] = deque(maxlen=history_size)
        self._lock = threading.Lock()
        self._subscribers: list[tuple[type[Any] | None, Callable[[Any], Any]]] = []

    def submit_event(self, event: Event) -> None:
        """Submit an event to the event bus."""
        with self._lock:
            self._events.append(event)
            subscribers = list(self._subscribers)
        for event_type, callback in subscribers:
            if event_type is None or isinstance(event, event_type):
                callback(event)

    def subscribe(self, event_type: type[Any] | None, callback: Callable[[Any], Any]) -> Callable[[], None]:
        """Call `callback` for every event of `event_type`. Returns an unsubscribe function."""
        entry = (event_type, callback)
        with self._lock:
            self._subscribers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._subscribers:
                    self._subscribers.remove(entry)

        return unsubscribe

    def get_events(
        self, event_type: type[Event] | type[Any] | None, after_t: int | None = None, limit: int | None = None
    ) -> list[Event]:
        """Get events from the event bus, oldest first."""
        result = []
        with self._lock:
            snapshot = list(self._events)
        for ev in reversed(snapshot):
            if after_t is not None and ev.event_t <= after_t:
                break
            if event_type is None or isinstance(ev, event_type):
                result.append(ev)
                if limit is not None and len(result) >= limit:
                    break
        return result[::-1]

    def clear(self) -> None:
        """Drop the event history."""
        with self._lock:
            self._events.clear()
