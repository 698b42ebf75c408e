"""State store."""

from collections.abc import Callable
from typing import Any, Concatenate, ParamSpec

from ..events import publish
from ..events.typeahead import ModelCommitted
from .state import TypeaheadState

P = ParamSpec("P")

Listener = Callable[[TypeaheadState, TypeaheadState], Any]


class StateStore:
    """Holds the current state of one typeahead and notifies listeners of changes.

    All access happens on the event loop that owns the typeahead. Transitions
    run to completion one at a time; listeners get `(old, new)` snapshots.
    """

    def __init__(self, state: TypeaheadState):
        """Initialize the store."""
        self._state = state
        self._listeners: list[Listener] = []

    @property
    def state(self) -> TypeaheadState:
        """Current state."""
        return self._state

    def swap(
        self,
        transition: Callable[Concatenate[TypeaheadState, P], TypeaheadState],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> TypeaheadState:
        """Apply `transition` to the current state and keep the result."""
        old = self._state
        new = transition(old, *args, **kwargs)
        if new is old:
            return new
        self._state = new
        if new.model is not old.model:
            publish(ModelCommitted(model=new.model))
        for listener in list(self._listeners):
            listener(old, new)
        return new

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(old, new)` after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
