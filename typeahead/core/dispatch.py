"""Search dispatcher."""

import asyncio
import inspect
from collections.abc import Callable, Collection
from typing import Any

from ..common.debounce import Debouncer
from ..common.logger import get_logger
from ..events import publish
from ..events.typeahead import (
    SearchAbandoned,
    SearchDispatched,
    SearchFailed,
    StaleSuggestionsDropped,
    SuggestionsReceived,
)
from .state import DataSource, TypeaheadState, got_suggestions, search_started, search_waiting
from .store import StateStore

logger = get_logger(__name__)


def accepts_callback(data_source: DataSource) -> bool:
    """Whether `data_source` takes a result callback after the search text."""
    try:
        signature = inspect.signature(data_source)
    except (TypeError, ValueError):
        return False
    positional = 0
    for param in signature.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2


def call_data_source(data_source: DataSource, text: str, callback: Callable[[Any], None]) -> Any:
    """Call `data_source` with `text`, and with `callback` if it takes one."""
    if accepts_callback(data_source):
        return data_source(text, callback)
    return data_source(text)


def promises_callback(result: Any) -> bool:
    """Whether a data source return value means the answer will come through the callback.

    `None`, `False` and other falsy non-collections are the callback sentinel. An
    empty collection is a real (empty) answer.
    """
    return not result and not isinstance(result, Collection)


class SearchDispatcher:
    """Sends settled input text to the data source and feeds the answers back into the store.

    Searches are processed one at a time. A data source may answer by returning
    a collection, by returning `None` (or `False`) and calling the callback once, or by
    returning an awaitable. Answers belonging to a search that was invalidated
    (by a reset or a data source change) are dropped.
    """

    def __init__(self, store: StateStore, debouncer: Debouncer[str]):
        """Initialize the dispatcher."""
        self._store = store
        self._debouncer = debouncer
        self._task: asyncio.Task | None = None
        self._pending: asyncio.Future | None = None
        self._unsubscribe = store.subscribe(self._on_state_changed)

    @property
    def busy(self) -> bool:
        """Whether a search is waiting for its answer."""
        return self._pending is not None and not self._pending.done()

    def start(self) -> None:
        """Start the dispatch loop on the running event loop."""
        if self._task is not None:
            raise RuntimeError("Dispatcher already started")
        self._task = asyncio.create_task(self._run(), name="typeahead-dispatch")

    async def close(self) -> None:
        """Stop the dispatch loop and abandon any outstanding search."""
        self._unsubscribe()
        self.abandon()
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    def abandon(self) -> None:
        """Stop waiting for the outstanding search, if any."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def _run(self) -> None:
        """Dispatch loop."""
        async for text in self._debouncer:
            try:
                await self.search(text)
            except Exception as e:
                logger.exception(f"Data source failed for {text!r}")
                publish(SearchFailed(text=text, error=repr(e)))

    async def search(self, text: str) -> None:
        """Run one search for `text` to completion."""
        loop = asyncio.get_running_loop()
        state = self._store.swap(search_started)
        generation = state.search_generation
        answer: asyncio.Future = loop.create_future()

        def callback(suggestions: Any) -> None:
            loop.call_soon_threadsafe(self._deliver, answer, text, generation, suggestions)

        logger.debug(f"Searching {text!r} (generation {generation})")
        publish(SearchDispatched(text=text, generation=generation))
        result = call_data_source(state.data_source, text, callback)

        if inspect.isawaitable(result):
            pending = asyncio.ensure_future(result)
        elif promises_callback(result):
            pending = answer
        else:
            self._apply(text, generation, result)
            return

        self._store.swap(search_waiting)
        self._pending = pending
        try:
            await asyncio.wait([pending])
        finally:
            self._pending = None
            if not pending.done():
                pending.cancel()

        if pending.cancelled():
            logger.debug(f"Abandoned search {text!r} (generation {generation})")
            publish(SearchAbandoned(text=text, generation=generation))
            return
        self._apply(text, generation, pending.result())

    def _deliver(self, answer: asyncio.Future, text: str, generation: int, suggestions: Any) -> None:
        """Resolve a callback-style answer on the loop."""
        if answer.done():
            logger.debug(f"Ignoring late answer for {text!r} (generation {generation})")
            publish(StaleSuggestionsDropped(text=text, generation=generation))
            return
        answer.set_result(suggestions)

    def _apply(self, text: str, generation: int, suggestions: Any) -> None:
        """Store the answer if it is still current."""
        if self._store.state.search_generation != generation:
            logger.debug(f"Dropping stale answer for {text!r} (generation {generation})")
            publish(StaleSuggestionsDropped(text=text, generation=generation))
            return
        state = self._store.swap(got_suggestions, suggestions)
        logger.debug(f"Got {len(state.suggestions)} suggestions for {text!r}")
        publish(SuggestionsReceived(text=text, generation=generation, count=len(state.suggestions)))

    def _on_state_changed(self, old: TypeaheadState, new: TypeaheadState) -> None:
        """Give up on the outstanding search once a newer generation starts."""
        if new.search_generation != old.search_generation:
            self.abandon()
