"""Test utilities and fake implementations."""

import asyncio
from collections.abc import Callable
from typing import Any

from typeahead.core.state import TypeaheadState


class Recorder:
    """Callable that records every value it is called with."""

    def __init__(self) -> None:
        """Start with no calls."""
        self.calls: list[Any] = []

    def __call__(self, value: Any) -> None:
        """Record `value`."""
        self.calls.append(value)


class FakeDebouncer:
    """Debouncer stand-in that only records what was put."""

    def __init__(self) -> None:
        """Start with nothing put."""
        self.values: list[str] = []

    def put(self, value: str) -> None:
        """Record `value`."""
        self.values.append(value)


class RecordingSource:
    """Synchronous data source recording the texts it was asked for."""

    def __init__(self, suggestions: Callable[[str], list[Any]] | None = None) -> None:
        """Answer with `suggestions(text)`, by default three variations of the text."""
        self.texts: list[str] = []
        self.times: list[float] = []
        self._suggestions = suggestions or (lambda text: [f"{text}1", f"{text}2", f"{text}3"])

    def __call__(self, text: str) -> list[Any]:
        """Record the search and answer it."""
        self.texts.append(text)
        self.times.append(asyncio.get_running_loop().time())
        return self._suggestions(text)


class ManualSource:
    """Callback-style data source answered by the test."""

    def __init__(self) -> None:
        """Start with no requests."""
        self.requests: list[tuple[str, Callable[[Any], None]]] = []

    def __call__(self, text: str, callback: Callable[[Any], None]) -> None:
        """Record the request; the test answers it later."""
        self.requests.append((text, callback))

    def answer(self, index: int, suggestions: Any) -> None:
        """Answer the request at `index`."""
        self.requests[index][1](suggestions)


def static_source(text: str) -> list[str]:
    """Data source that ignores its input."""
    return ["alpha", "beta", "gamma"]


def make_state(suggestions: tuple[Any, ...] = (), **kwargs: Any) -> TypeaheadState:
    """Build a state around `static_source`."""
    return TypeaheadState(data_source=static_source, suggestions=suggestions, **kwargs)


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.005) -> None:
    """Poll `predicate` until it holds, failing after `timeout` seconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met in time")
        await asyncio.sleep(interval)
