"""Input and keyboard adapter."""

from enum import StrEnum

from ..common.debounce import Debouncer
from ..events import publish
from ..events.typeahead import InputTextChanged, TypeaheadReset
from .state import (
    activate_suggestion_next,
    activate_suggestion_prev,
    choose_suggestion_active,
    input_text_changed,
    input_text_will_blur,
    reset_typeahead,
)
from .store import StateStore


class Key(StrEnum):
    """Keys the typeahead reacts to, named as Textual names them."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    TAB = "tab"


class InputAdapter:
    """Translates text changes and key presses into state transitions."""

    def __init__(self, store: StateStore, debouncer: Debouncer[str]):
        """Initialize the adapter."""
        self._store = store
        self._debouncer = debouncer

    def text_changed(self, new_text: str) -> None:
        """Handle a change notification from the input."""
        # Inputs also report changes that leave the value as it was.
        if new_text == self._store.state.input_text:
            return
        self._store.swap(input_text_changed, new_text)
        self._debouncer.put(new_text)
        publish(InputTextChanged(text=new_text))

    def will_blur(self) -> None:
        """Handle the input losing focus."""
        self._store.swap(input_text_will_blur)

    def key_down(self, key: str) -> bool:
        """Handle a key press. Returns True if the input's default action must be suppressed."""
        if key == Key.UP:
            self._store.swap(activate_suggestion_prev)
        elif key == Key.DOWN:
            self._store.swap(activate_suggestion_next)
        elif key == Key.ENTER:
            self._store.swap(choose_suggestion_active)
        elif key == Key.ESCAPE:
            self._store.swap(reset_typeahead)
            publish(TypeaheadReset())
        elif key == Key.TAB:
            # Tab cycles through suggestions while there are any, otherwise it moves focus.
            if self._store.state.suggestions:
                self._store.swap(activate_suggestion_next)
                return True
            self._store.swap(input_text_will_blur)
        return False
