"""Unit tests for SingleFlight call coalescing."""

from __future__ import annotations

import asyncio

import pytest

from storefront_gateway.cache import SingleFlight


pytestmark = pytest.mark.unit


class TestSingleFlight:
    """Tests for SingleFlight."""

    async def test_concurrent_calls_share_one_execution(self) -> None:
        """Should run the function once for concurrent callers."""
        flight = SingleFlight()
        calls = 0
        release = asyncio.Event()

        async def work() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            return "done"

        tasks = [asyncio.create_task(flight.do("key", work)) for _ in range(10)]
        await asyncio.sleep(0)
        assert flight.in_flight("key") is True

        release.set()
        results = await asyncio.gather(*tasks)

        assert calls == 1
        assert results == ["done"] * 10
        assert flight.in_flight("key") is False

    async def test_exception_is_shared_by_all_waiters(self) -> None:
        """Should deliver the same failure to every concurrent caller."""
        flight = SingleFlight()
        calls = 0
        release = asyncio.Event()

        async def work() -> str:
            nonlocal calls
            calls += 1
            await release.wait()
            raise RuntimeError("upstream down")

        tasks = [asyncio.create_task(flight.do("key", work)) for _ in range(3)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)

    async def test_sequential_calls_run_again(self) -> None:
        """Should start a new execution once the previous one finished."""
        flight = SingleFlight()
        calls = 0

        async def work() -> int:
            nonlocal calls
            calls += 1
            return calls

        assert await flight.do("key", work) == 1
        assert await flight.do("key", work) == 2

    async def test_different_keys_do_not_coalesce(self) -> None:
        """Should run separately for different keys."""
        flight = SingleFlight()
        release = asyncio.Event()
        started: list[str] = []

        def make(name: str):
            async def work() -> str:
                started.append(name)
                await release.wait()
                return name

            return work

        first = asyncio.create_task(flight.do("a", make("a")))
        second = asyncio.create_task(flight.do("b", make("b")))
        await asyncio.sleep(0)
        release.set()

        assert await asyncio.gather(first, second) == ["a", "b"]
        assert sorted(started) == ["a", "b"]

    async def test_cancelled_waiter_does_not_cancel_shared_call(self) -> None:
        """Should let other callers finish when one waiter is cancelled."""
        flight = SingleFlight()
        release = asyncio.Event()

        async def work() -> str:
            await release.wait()
            return "done"

        cancelled = asyncio.create_task(flight.do("key", work))
        survivor = asyncio.create_task(flight.do("key", work))
        await asyncio.sleep(0)

        cancelled.cancel()
        await asyncio.sleep(0)
        release.set()

        assert await survivor == "done"
        assert cancelled.cancelled()
