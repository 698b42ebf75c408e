"""Typeahead state and transitions.

Every transition takes a `TypeaheadState` (plus arguments) and returns the next
one. They are pure, except that committing a new model calls the user's
`on_change` callback.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from ..common.cell import Cell, deref_or_value
from ..common.pydantic import DEFAULT_DEBOUNCE_DELAY_MS, TypeaheadOptions

DataSource = Callable[..., Any]


def default_suggestion_to_string(suggestion: Any) -> str:
    """Generic string form of a suggestion."""
    if suggestion is None:
        return ""
    return str(suggestion)


class ModelEvent(StrEnum):
    """Events that may commit the model or display a suggestion."""

    INPUT_TEXT_BLURRED = "input-text-blurred"
    SUGGESTION_ACTIVATED = "suggestion-activated"
    INPUT_TEXT_CHANGED = "input-text-changed"


@dataclass(frozen=True)
class TypeaheadState:
    """Snapshot of one typeahead."""

    data_source: DataSource
    suggestion_to_string: Callable[[Any], str | None] = default_suggestion_to_string
    rigid: bool | Cell = True
    change_on_blur: bool | Cell = True
    on_change: Callable[[Any], Any] | None = None
    debounce_delay_ms: int = DEFAULT_DEBOUNCE_DELAY_MS

    input_text: str = ""
    model: Any = None
    external_model: Any = None
    suggestions: tuple[Any, ...] = ()
    active_index: int | None = None
    waiting: bool = False
    displaying_suggestion: bool = False
    search_generation: int = 0

    @property
    def active_suggestion(self) -> Any:
        """The highlighted suggestion, if any."""
        if self.active_index is None:
            return None
        return self.suggestions[self.active_index]


def make_typeahead_state(options: TypeaheadOptions) -> TypeaheadState:
    """Initial state for `options`, displaying the initial model if there is one."""
    external = deref_or_value(options.model)
    state = TypeaheadState(
        data_source=options.data_source,
        suggestion_to_string=options.suggestion_to_string or default_suggestion_to_string,
        rigid=options.rigid,
        change_on_blur=options.change_on_blur,
        on_change=options.on_change,
        debounce_delay_ms=options.debounce_delay_ms,
        model=external,
        external_model=external,
    )
    if external is not None:
        state = display_suggestion(state, external)
    return state


# ------------------------------------------------------------------------------------
# Policy
# ------------------------------------------------------------------------------------


def updates_model(state: TypeaheadState, event: ModelEvent) -> bool:
    """Should `event` update the model?"""
    change_on_blur = deref_or_value(state.change_on_blur)
    rigid = deref_or_value(state.rigid)
    if event == ModelEvent.INPUT_TEXT_BLURRED:
        return change_on_blur and not rigid
    if event == ModelEvent.SUGGESTION_ACTIVATED:
        return not change_on_blur
    if event == ModelEvent.INPUT_TEXT_CHANGED:
        return not (change_on_blur or rigid)
    raise ValueError(f"Unknown event: {event}")


def displays_suggestion(state: TypeaheadState, event: ModelEvent) -> bool:
    """Should `event` show the active suggestion in the input text?"""
    if event == ModelEvent.SUGGESTION_ACTIVATED:
        return not deref_or_value(state.change_on_blur)
    return False


# ------------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------------


def update_model(state: TypeaheadState, new_value: Any) -> TypeaheadState:
    """Commit `new_value` as the model and tell `on_change`."""
    if state.on_change is not None:
        state.on_change(new_value)
    return replace(state, model=new_value)


def display_suggestion(state: TypeaheadState, suggestion: Any) -> TypeaheadState:
    """Show the string form of `suggestion` as the input text."""
    text = state.suggestion_to_string(suggestion)
    if text is None:
        return state
    return replace(state, input_text=text, displaying_suggestion=True)


def clear_suggestions(state: TypeaheadState) -> TypeaheadState:
    """Close the suggestion list."""
    return replace(state, suggestions=(), active_index=None)


def _in_range(state: TypeaheadState, index: int) -> bool:
    return 0 <= index < len(state.suggestions)


# ------------------------------------------------------------------------------------
# Transitions
# ------------------------------------------------------------------------------------


def activate_suggestion_by_index(state: TypeaheadState, index: int) -> TypeaheadState:
    """Make the suggestion at `index` the active one."""
    if not _in_range(state, index):
        return state
    suggestion = state.suggestions[index]
    state = replace(state, active_index=index)
    if updates_model(state, ModelEvent.SUGGESTION_ACTIVATED):
        state = update_model(state, suggestion)
    if displays_suggestion(state, ModelEvent.SUGGESTION_ACTIVATED):
        state = display_suggestion(state, suggestion)
    return state


def choose_suggestion_by_index(state: TypeaheadState, index: int) -> TypeaheadState:
    """Choose the suggestion at `index`: commit it, show it and close the list."""
    if not _in_range(state, index):
        return state
    suggestion = state.suggestions[index]
    state = activate_suggestion_by_index(state, index)
    state = update_model(state, suggestion)
    state = display_suggestion(state, suggestion)
    return clear_suggestions(state)


def choose_suggestion_active(state: TypeaheadState) -> TypeaheadState:
    """Choose the active suggestion, if there is one."""
    if state.active_index is None:
        return state
    return choose_suggestion_by_index(state, state.active_index)


def activate_suggestion_next(state: TypeaheadState) -> TypeaheadState:
    """Activate the suggestion after the active one, wrapping around."""
    if not state.suggestions:
        return state
    current = -1 if state.active_index is None else state.active_index
    return activate_suggestion_by_index(state, (current + 1) % len(state.suggestions))


def activate_suggestion_prev(state: TypeaheadState) -> TypeaheadState:
    """Activate the suggestion before the active one, wrapping around."""
    if not state.suggestions:
        return state
    current = 0 if state.active_index is None else state.active_index
    return activate_suggestion_by_index(state, (current - 1) % len(state.suggestions))


def reset_typeahead(state: TypeaheadState) -> TypeaheadState:
    """Clear text and suggestions. Outstanding searches become stale."""
    state = replace(
        clear_suggestions(state),
        waiting=False,
        input_text="",
        displaying_suggestion=False,
        search_generation=state.search_generation + 1,
    )
    if updates_model(state, ModelEvent.INPUT_TEXT_CHANGED):
        state = update_model(state, None)
    return state


def got_suggestions(state: TypeaheadState, suggestions: Iterable[Any]) -> TypeaheadState:
    """New suggestions are available."""
    return replace(state, suggestions=tuple(suggestions), waiting=False, active_index=None)


def search_started(state: TypeaheadState) -> TypeaheadState:
    """A search is about to be sent to the data source."""
    return replace(state, search_generation=state.search_generation + 1)


def search_waiting(state: TypeaheadState) -> TypeaheadState:
    """The data source will answer later."""
    return replace(state, waiting=True)


def input_text_changed(state: TypeaheadState, new_text: str) -> TypeaheadState:
    """The user typed `new_text`."""
    state = replace(state, input_text=new_text, displaying_suggestion=False)
    if updates_model(state, ModelEvent.INPUT_TEXT_CHANGED):
        state = update_model(state, new_text)
    return state


def input_text_will_blur(state: TypeaheadState) -> TypeaheadState:
    """The input is about to lose focus: commit free text if allowed."""
    if not state.displaying_suggestion and updates_model(state, ModelEvent.INPUT_TEXT_BLURRED):
        return update_model(state, state.input_text)
    return state


def change_data_source(state: TypeaheadState, data_source: DataSource) -> TypeaheadState:
    """Switch data sources. Existing suggestions came from the old one, so reset."""
    return replace(reset_typeahead(state), data_source=data_source)


def external_model_changed(state: TypeaheadState, new_value: Any) -> TypeaheadState:
    """The bound model was changed from outside; follow it without calling `on_change`."""
    state = replace(state, model=new_value, external_model=new_value)
    state = display_suggestion(state, new_value)
    return clear_suggestions(state)


def observe_external_model(state: TypeaheadState, value: Any) -> TypeaheadState:
    """Record the external model when it already matches the committed one."""
    return replace(state, external_model=value)
