"""Observable value cells."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Cell(Generic[T]):
    """A mutable value owned outside the typeahead, observed for changes."""

    def __init__(self, value: T):
        """Initialize the cell."""
        self._value = value
        self._subscribers: list[Callable[[T], Any]] = []

    def __repr__(self) -> str:
        """Represent the cell."""
        return f"Cell({self._value!r})"

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    @value.setter
    def value(self, new: T) -> None:
        """Set the value and notify subscribers if it changed."""
        if new == self._value:
            return
        self._value = new
        for callback in list(self._subscribers):
            callback(new)

    def subscribe(self, callback: Callable[[T], Any]) -> Callable[[], None]:
        """Call `callback` with each new value. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


def deref_or_value(value: "Cell[T] | T") -> T:
    """Return the current value of a cell, or the value itself."""
    if isinstance(value, Cell):
        return value.value
    return value
