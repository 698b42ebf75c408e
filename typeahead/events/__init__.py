"""Events."""

from collections.abc import Callable
from typing import Any, TypeVar

from .core import Event, EventBus

HISTORY_SIZE = 10_000

_default_event_bus = EventBus(HISTORY_SIZE)


def publish(event: Event) -> None:
    """Publish an event."""
    return _default_event_bus.submit_event(event)


def get_events(
    event_type: type[Event] | type[Any] | None, after_t: int | None = None, limit: int | None = None
) -> list[Event]:
    """Get events from the event bus."""
    return _default_event_bus.get_events(event_type=event_type, after_t=after_t, limit=limit)


T = TypeVar("T")


def subscribe(event_type: type[T] | None, callback: Callable[[T], Any]) -> Callable[[], None]:
    """Register a callback for a specific event type. Returns an unsubscribe function."""
    return _default_event_bus.subscribe(event_type, callback)


__all__ = ["Event", "EventBus", "get_events", "publish", "subscribe"]
