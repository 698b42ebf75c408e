"""Typeahead controller."""

import asyncio
from collections.abc import Callable
from typing import Any, Self

from ..common.cell import Cell
from ..common.debounce import Debouncer
from ..common.logger import get_logger
from ..common.pydantic import TypeaheadOptions
from ..events import publish
from ..events.typeahead import TypeaheadReset
from .adapter import InputAdapter
from .dispatch import SearchDispatcher
from .state import (
    DataSource,
    TypeaheadState,
    activate_suggestion_by_index,
    change_data_source,
    choose_suggestion_by_index,
    clear_suggestions,
    external_model_changed,
    make_typeahead_state,
    observe_external_model,
    reset_typeahead,
)
from .store import Listener, StateStore

logger = get_logger(__name__)

_UNSET: Any = object()


class Typeahead:
    """One typeahead: state, debounce stage, dispatcher and input adapter.

    The presentation layer reads `state` (or subscribes to changes) and forwards
    input events to the entry points below. The debounce and dispatch loops run
    on the event loop that called `start`, until `close`.
    """

    def __init__(self, options: TypeaheadOptions | None = None, **kwargs: Any):
        """Initialize the typeahead from options, or from keyword options."""
        if options is not None and kwargs:
            raise TypeError(f"Pass either options or keyword options, not both (got {sorted(kwargs)})")
        self.options = options if options is not None else TypeaheadOptions(**kwargs)
        self._store = StateStore(make_typeahead_state(self.options))
        self._debouncer: Debouncer[str] = Debouncer(self.options.debounce_delay)
        self._dispatcher = SearchDispatcher(self._store, self._debouncer)
        self._adapter = InputAdapter(self._store, self._debouncer)
        self._unsubscribe_model: Callable[[], None] | None = None
        self._started = False
        self._closed = False

    @property
    def state(self) -> TypeaheadState:
        """Current state."""
        return self._store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(old, new)` after every state change."""
        return self._store.subscribe(listener)

    def start(self) -> Self:
        """Start the debounce and dispatch loops on the running event loop."""
        if self._started:
            raise RuntimeError("Typeahead already started")
        self._started = True
        self._debouncer.start()
        self._dispatcher.start()
        if isinstance(self.options.model, Cell):
            loop = asyncio.get_running_loop()
            self._unsubscribe_model = self.options.model.subscribe(lambda _: loop.call_soon(self.reconcile))
        logger.info(f"Typeahead started (debounce {self.options.debounce_delay_ms} ms)")
        return self

    async def close(self) -> None:
        """Stop both loops and release the data source."""
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe_model is not None:
            self._unsubscribe_model()
        await self._dispatcher.close()
        await self._debouncer.close()
        logger.info("Typeahead closed")

    async def __aenter__(self) -> Self:
        """Start the typeahead."""
        return self.start()

    async def __aexit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        """Close the typeahead."""
        await self.close()

    # Input events

    def input_text_changed(self, text: str) -> None:
        """The input text was edited."""
        self._adapter.text_changed(text)

    def input_key_down(self, key: str) -> bool:
        """A key was pressed in the input. Returns True if its default action must be suppressed."""
        return self._adapter.key_down(key)

    def input_text_will_blur(self) -> None:
        """The input is about to lose focus."""
        self._adapter.will_blur()

    # Mouse events

    def activate_suggestion_by_index(self, index: int) -> None:
        """Highlight a suggestion, e.g. on mouse hover."""
        self._store.swap(activate_suggestion_by_index, index)

    def choose_suggestion_by_index(self, index: int) -> None:
        """Choose a suggestion, e.g. on mouse down."""
        self._store.swap(choose_suggestion_by_index, index)

    def dismiss_suggestions(self) -> None:
        """Close the suggestion list without changing text or model, e.g. on a click elsewhere."""
        self._store.swap(clear_suggestions)

    def reset(self) -> None:
        """Clear the typeahead."""
        self._store.swap(reset_typeahead)
        publish(TypeaheadReset())

    # External changes

    def reconcile(self, data_source: DataSource | None = None, model: Any = _UNSET) -> None:
        """Catch up with values owned by the caller.

        A new `data_source` resets the typeahead. A `model` (by default the bound
        model option) that differs from the last one seen replaces the committed
        model, unless it is the value this typeahead just reported via `on_change`.
        """
        if data_source is not None and data_source != self.state.data_source:
            logger.debug("Data source changed")
            self._store.swap(change_data_source, data_source)
        if model is _UNSET:
            if not isinstance(self.options.model, Cell):
                return
            model = self.options.model.value
        self._reconcile_model(model)

    def _reconcile_model(self, value: Any) -> None:
        if value == self.state.external_model:
            return
        if value == self.state.model:
            self._store.swap(observe_external_model, value)
        else:
            logger.debug(f"External model changed to {value!r}")
            self._store.swap(external_model_changed, value)

    def render_suggestion(self, suggestion: Any) -> Any:
        """Renderable form of a suggestion for the current input text."""
        if self.options.render_suggestion is not None:
            return self.options.render_suggestion(self.state.input_text, suggestion)
        return self.state.suggestion_to_string(suggestion)

