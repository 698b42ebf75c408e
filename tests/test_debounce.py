"""Test suite for the debounce stage."""

import asyncio

import pytest

from typeahead.common.debounce import Debouncer

DELAY = 0.1


async def collect(debouncer: Debouncer[str], into: list[tuple[str, float]]) -> None:
    """Record every settled value with the loop time it arrived."""
    loop = asyncio.get_running_loop()
    async for value in debouncer:
        into.append((value, loop.time()))


class TestDebouncer:
    """Test last-value-wins debouncing."""

    @pytest.mark.asyncio
    async def test_burst_forwards_only_last_value(self):
        """Values closer together than the delay collapse into the last one."""
        debouncer = Debouncer[str](DELAY).start()
        try:
            for value in ["a", "b", "c"]:
                debouncer.put(value)
                await asyncio.sleep(DELAY / 5)
            assert await asyncio.wait_for(debouncer.get(), timeout=1.0) == "c"
            with pytest.raises(TimeoutError):
                await asyncio.wait_for(debouncer.get(), timeout=2 * DELAY)
        finally:
            await debouncer.close()

    @pytest.mark.asyncio
    async def test_separate_bursts_are_forwarded_in_order(self):
        """Each burst settles on its own."""
        debouncer = Debouncer[str](DELAY / 2).start()
        try:
            debouncer.put("first")
            assert await asyncio.wait_for(debouncer.get(), timeout=1.0) == "first"
            debouncer.put("second")
            debouncer.put("third")
            assert await asyncio.wait_for(debouncer.get(), timeout=1.0) == "third"
        finally:
            await debouncer.close()

    @pytest.mark.asyncio
    async def test_settling_times(self):
        """Typing at 0, 0.4 and 1.6 delays forwards the 2nd value at 1.4 and the 3rd at 2.6 delays."""
        debouncer = Debouncer[str](DELAY).start()
        received: list[tuple[str, float]] = []
        collector = asyncio.create_task(collect(debouncer, received))
        loop = asyncio.get_running_loop()
        t0 = loop.time()
        try:
            debouncer.put("a")
            await asyncio.sleep(0.4 * DELAY)
            debouncer.put("ab")
            await asyncio.sleep(1.2 * DELAY)
            debouncer.put("abc")
            await asyncio.sleep(2 * DELAY)
        finally:
            collector.cancel()
            await debouncer.close()

        assert [value for value, _ in received] == ["ab", "abc"]
        ab_at, abc_at = (t - t0 for _, t in received)
        assert 1.3 * DELAY <= ab_at < 1.6 * DELAY + 0.05
        assert 2.5 * DELAY <= abc_at < 2.8 * DELAY + 0.05

    @pytest.mark.asyncio
    async def test_close_stops_loop(self):
        """Closing stops the loop and drops the pending value."""
        debouncer = Debouncer[str](DELAY).start()
        assert debouncer.running
        debouncer.put("pending")
        await debouncer.close()
        assert not debouncer.running

    @pytest.mark.asyncio
    async def test_start_twice_fails(self):
        """A debouncer is started once."""
        debouncer = Debouncer[str](DELAY).start()
        try:
            with pytest.raises(RuntimeError):
                debouncer.start()
        finally:
            await debouncer.close()

    @pytest.mark.asyncio
    async def test_close_without_start(self):
        """Closing an idle debouncer is harmless."""
        debouncer = Debouncer[str](DELAY)
        await debouncer.close()
        assert not debouncer.running
