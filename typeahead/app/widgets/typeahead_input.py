"""Typeahead input widget."""

from collections.abc import Callable
from typing import Any

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Input, Label, OptionList
from textual.widgets.option_list import Option

from ...core.adapter import Key
from ...core.controller import Typeahead
from ...core.state import TypeaheadState

HANDLED_KEYS = {key.value for key in Key}


class SuggestionInput(Input):
    """An Input that lets the typeahead handle navigation keys.

    Tab is only trapped while suggestions are shown, otherwise it commits free
    text (when allowed) and moves focus. Moving focus to another widget closes
    the suggestions.
    """

    def __init__(self, typeahead: Typeahead, **kwargs: Any):
        """Initialize the input."""
        super().__init__(**kwargs)
        self._typeahead = typeahead

    async def _on_key(self, event: events.Key) -> None:
        """Route typeahead keys before the input sees them."""
        if event.key in HANDLED_KEYS and self._typeahead.input_key_down(event.key):
            event.prevent_default()
            event.stop()
            return
        await super()._on_key(event)

    def on_blur(self, event: events.Blur) -> None:
        """Close the suggestions when focus moves to another widget."""
        # Nothing is focused after a click on an unfocusable widget such as the suggestion list.
        if self.screen.focused is not None:
            self._typeahead.dismiss_suggestions()


class SuggestionList(OptionList):
    """Suggestion list that never takes focus and reports the option under the mouse."""

    can_focus = False

    class Hovered(Message):
        """Message posted when the mouse moves over an option."""

        def __init__(self, suggestion_list: "SuggestionList", index: int) -> None:
            """Initialize the hovered message."""
            super().__init__()
            self.suggestion_list = suggestion_list
            self.index = index

    def on_mouse_move(self, event: events.MouseMove) -> None:
        """Report the hovered option."""
        index = event.style.meta.get("option")
        if index is not None:
            self.post_message(self.Hovered(self, index))


class TypeaheadInput(Vertical):
    """Text input with a debounced suggestion list."""

    DEFAULT_CSS = """
    TypeaheadInput {
        height: auto;
    }

    TypeaheadInput > SuggestionList {
        height: auto;
        max-height: 12;
        border: none;
    }

    TypeaheadInput > .typeahead-waiting {
        color: $text-muted;
        padding: 0 1;
    }
    """

    class Changed(Message):
        """Message posted when the committed model changes."""

        def __init__(self, typeahead_input: "TypeaheadInput", model: Any) -> None:
            """Initialize the changed message."""
            super().__init__()
            self.typeahead_input = typeahead_input
            self.model = model

    def __init__(
        self,
        data_source: Callable[..., Any],
        *,
        model: Any = None,
        on_change: Callable[[Any], Any] | None = None,
        placeholder: str = "",
        **options: Any,
    ):
        """Initialize the widget. Remaining keyword options configure the typeahead."""
        widget_kwargs = {k: options.pop(k) for k in ("id", "classes", "name") if k in options}
        super().__init__(**widget_kwargs)
        self._user_on_change = on_change
        self.typeahead = Typeahead(data_source=data_source, model=model, on_change=self._on_model_change, **options)
        self.input = SuggestionInput(self.typeahead, placeholder=placeholder, classes="typeahead-input")
        self.waiting_label = Label("Searching...", classes="typeahead-waiting")
        self.suggestion_list = SuggestionList(classes="typeahead-suggestions")
        self._shown_suggestions: tuple[Any, ...] | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        """Compose the widget."""
        yield self.input
        yield self.waiting_label
        yield self.suggestion_list

    def on_mount(self) -> None:
        """Start the typeahead when mounted."""
        self.typeahead.start()
        self._unsubscribe = self.typeahead.subscribe(lambda _, new: self._render_state(new))
        self._render_state(self.typeahead.state)

    async def on_unmount(self) -> None:
        """Stop the typeahead."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        await self.typeahead.close()

    def on_input_changed(self, message: Input.Changed) -> None:
        """Forward text edits."""
        if message.input is not self.input:
            return
        message.stop()
        self.typeahead.input_text_changed(message.value)

    def on_option_list_option_selected(self, message: OptionList.OptionSelected) -> None:
        """Choose the clicked suggestion."""
        message.stop()
        self.typeahead.choose_suggestion_by_index(message.option_index)
        self.input.focus()

    def on_suggestion_list_hovered(self, message: SuggestionList.Hovered) -> None:
        """Activate the suggestion under the mouse."""
        message.stop()
        if message.index != self.typeahead.state.active_index:
            self.typeahead.activate_suggestion_by_index(message.index)

    def _on_model_change(self, model: Any) -> None:
        if self._user_on_change is not None:
            self._user_on_change(model)
        self.post_message(self.Changed(self, model))

    def _render_state(self, state: TypeaheadState) -> None:
        """Show `state`."""
        if self.input.value != state.input_text:
            with self.input.prevent(Input.Changed):
                self.input.value = state.input_text
            self.input.cursor_position = len(state.input_text)

        if state.suggestions is not self._shown_suggestions:
            self._shown_suggestions = state.suggestions
            self.suggestion_list.clear_options()
            self.suggestion_list.add_options(
                [Option(self.typeahead.render_suggestion(s)) for s in state.suggestions]
            )
        self.suggestion_list.highlighted = state.active_index

        self.suggestion_list.display = bool(state.suggestions)
        self.waiting_label.display = state.waiting
