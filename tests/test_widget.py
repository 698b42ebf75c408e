"""Test suite for the typeahead Textual widget."""

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Button

from typeahead.app.widgets.typeahead_input import TypeaheadInput
from tests.test_utils import RecordingSource, wait_until


class _TypeaheadInputApp(App):
    def __init__(self, widget: TypeaheadInput) -> None:
        super().__init__()
        self._widget = widget

    def compose(self) -> ComposeResult:
        yield self._widget
        yield Button("Elsewhere", id="elsewhere")

    def on_mount(self) -> None:
        self._widget.input.focus()


def make_widget() -> TypeaheadInput:
    """A widget over a synchronous source answering `text1`..`text3`."""
    return TypeaheadInput(RecordingSource(), debounce_delay_ms=10)


@pytest.mark.asyncio
async def test_typing_shows_suggestions():
    """Typed text is searched and the answers are listed."""
    widget = make_widget()
    async with _TypeaheadInputApp(widget).run_test() as pilot:
        await pilot.press("a")
        await wait_until(lambda: widget.typeahead.state.suggestions == ("a1", "a2", "a3"))
        await pilot.pause()
        assert widget.suggestion_list.option_count == 3
        assert widget.suggestion_list.display


@pytest.mark.asyncio
async def test_hover_activates_suggestion():
    """Moving the mouse over a suggestion makes it the active one."""
    widget = make_widget()
    async with _TypeaheadInputApp(widget).run_test() as pilot:
        await pilot.press("a")
        await wait_until(lambda: bool(widget.typeahead.state.suggestions))
        await pilot.pause()
        await pilot.hover(".typeahead-suggestions", offset=(2, 1))
        await pilot.pause()
        assert widget.typeahead.state.active_index == 1
        assert widget.suggestion_list.highlighted == 1
        assert widget.input.value == "a"


@pytest.mark.asyncio
async def test_new_suggestions_clear_highlight():
    """A new result set has no highlighted suggestion."""
    widget = make_widget()
    async with _TypeaheadInputApp(widget).run_test() as pilot:
        await pilot.press("a")
        await wait_until(lambda: bool(widget.typeahead.state.suggestions))
        await pilot.press("down")
        await pilot.pause()
        assert widget.suggestion_list.highlighted == 0

        await pilot.press("b")
        await wait_until(lambda: widget.typeahead.state.suggestions == ("ab1", "ab2", "ab3"))
        await pilot.pause()
        assert widget.typeahead.state.active_index is None
        assert widget.suggestion_list.highlighted is None


@pytest.mark.asyncio
async def test_focus_elsewhere_dismisses_suggestions():
    """Moving focus to another widget closes the list and keeps the text."""
    widget = make_widget()
    app = _TypeaheadInputApp(widget)
    async with app.run_test() as pilot:
        await pilot.press("a")
        await wait_until(lambda: bool(widget.typeahead.state.suggestions))
        app.query_one("#elsewhere", Button).focus()
        await pilot.pause()
        assert widget.typeahead.state.suggestions == ()
        assert widget.typeahead.state.input_text == "a"
        assert not widget.suggestion_list.display
