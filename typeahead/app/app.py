"""Demo application."""

from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Label

from ..common.logger import get_logger
from .app_config import AppConfig, build_data_source
from .widgets.typeahead_input import TypeaheadInput

logger = get_logger(__name__)


class TypeaheadApp(App):
    """Pick a word with a typeahead."""

    TITLE = "Typeahead"
    BINDINGS: ClassVar = [
        Binding("ctrl+c", "close_app", "Close application", priority=True),
        Binding("ctrl+r", "reset", "Reset"),
    ]

    CSS = """
    TypeaheadInput {
        margin: 1;
    }

    .typeahead-input {
        border: solid $accent;
    }

    #model_label {
        margin: 0 1;
        color: $text-muted;
    }
    """

    def __init__(self, config: AppConfig):
        """Initialize the app."""
        super().__init__()
        self._config = config

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()
        yield TypeaheadInput(
            build_data_source(self._config),
            placeholder="Type a fruit...",
            rigid=self._config.rigid,
            change_on_blur=self._config.change_on_blur,
            debounce_delay_ms=self._config.debounce_delay_ms,
            id="typeahead",
        )
        yield Label("Model: None", id="model_label")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the input."""
        self.query_one(TypeaheadInput).input.focus()

    def on_typeahead_input_changed(self, message: TypeaheadInput.Changed) -> None:
        """Show the committed model."""
        logger.info(f"Model changed to {message.model!r}")
        self.query_one("#model_label", Label).update(f"Model: {message.model!r}")

    def action_reset(self) -> None:
        """Clear the typeahead."""
        self.query_one(TypeaheadInput).typeahead.reset()

    def action_close_app(self) -> None:
        """Close the application."""
        self.exit()

    def dump_config(self) -> AppConfig:
        """Dump the app config."""
        return self._config.model_copy()
