"""Debounce stage."""

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, Self, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Forward only the last value of each burst, after `delay` seconds of silence.

    Values are put from synchronous code with `put` and read back with `get`
    (or by iterating the debouncer). The loop races the next input against the
    delay: a new value restarts the wait, a timeout forwards the pending value.
    """

    def __init__(self, delay: float):
        """Initialize the debouncer."""
        self._delay = delay
        self._in: asyncio.Queue[T] = asyncio.Queue()
        self._out: asyncio.Queue[T] = asyncio.Queue()
        self._task: asyncio.Task | None = None

    @property
    def delay(self) -> float:
        """Quiet window in seconds."""
        return self._delay

    @property
    def running(self) -> bool:
        """Whether the debounce loop is running."""
        return self._task is not None and not self._task.done()

    def start(self) -> Self:
        """Start the debounce loop on the running event loop."""
        if self._task is not None:
            raise RuntimeError("Debouncer already started")
        self._task = asyncio.create_task(self._run(), name="typeahead-debounce")
        return self

    async def close(self) -> None:
        """Stop the debounce loop, discarding any pending value."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    def put(self, value: T) -> None:
        """Submit a value."""
        self._in.put_nowait(value)

    async def get(self) -> T:
        """Wait for the next settled value."""
        return await self._out.get()

    def __aiter__(self) -> AsyncIterator[T]:
        """Iterate over settled values."""
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            yield await self.get()

    async def _run(self) -> None:
        """Debounce loop."""
        while True:
            pending = await self._in.get()
            while True:
                try:
                    pending = await asyncio.wait_for(self._in.get(), timeout=self._delay)
                except TimeoutError:
                    break
            self._out.put_nowait(pending)
