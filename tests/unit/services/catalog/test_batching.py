"""Unit tests for chunked batch resolution."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from storefront_gateway.clients.exceptions import UpstreamTimeoutError
from storefront_gateway.services.catalog.batching import (
    DEFAULT_CHUNK_SIZE,
    BatchResolver,
    chunked,
)


pytestmark = pytest.mark.unit


async def _echo(keys: list[str]) -> list[str]:
    return [f"resolved:{k}" for k in keys]


class TestChunked:
    """Tests for chunked."""

    def test_splits_with_remainder(self) -> None:
        """Should produce full chunks followed by the remainder."""
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty(self) -> None:
        """Should produce no chunks for no items."""
        assert chunked([], 50) == []

    def test_rejects_non_positive_size(self) -> None:
        """Should refuse a zero chunk size."""
        with pytest.raises(ValueError, match="chunk size must be positive"):
            chunked([1], 0)


class TestBatchResolver:
    """Tests for BatchResolver.resolve."""

    async def test_120_keys_make_three_chunks(self) -> None:
        """Should issue chunks of 50, 50 and 20 keys."""
        resolve_chunk = AsyncMock(side_effect=_echo)
        resolver = BatchResolver(resolve_chunk, chunk_size=DEFAULT_CHUNK_SIZE)

        results = await resolver.resolve([f"h{i}" for i in range(120)])

        sizes = [len(call.args[0]) for call in resolve_chunk.await_args_list]
        assert sizes == [50, 50, 20]
        assert len(results) == 120

    async def test_deduplicates_keys(self) -> None:
        """Should query each key once, first occurrence wins."""
        resolve_chunk = AsyncMock(side_effect=_echo)
        resolver = BatchResolver(resolve_chunk, chunk_size=2)

        results = await resolver.resolve(["a", "b", "a", "c", "b"])

        assert [call.args[0] for call in resolve_chunk.await_args_list] == [
            ["a", "b"],
            ["c"],
        ]
        assert results == ["resolved:a", "resolved:b", "resolved:c"]

    async def test_empty_input_makes_no_calls(self) -> None:
        """Should not call upstream for an empty key set."""
        resolve_chunk = AsyncMock(side_effect=_echo)
        resolver = BatchResolver(resolve_chunk)

        assert await resolver.resolve([]) == []
        resolve_chunk.assert_not_awaited()

    async def test_chunks_run_concurrently(self) -> None:
        """Should have every chunk in flight at the same time."""
        in_flight = 0
        peak = 0

        async def resolve_chunk(keys: list[str]) -> list[str]:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return keys

        resolver = BatchResolver(resolve_chunk, chunk_size=10)

        await resolver.resolve([str(i) for i in range(40)])

        assert peak == 4

    async def test_results_concatenate_in_chunk_order(self) -> None:
        """Should concatenate results chunk by chunk regardless of finish order."""

        async def resolve_chunk(keys: list[str]) -> list[str]:
            # First chunk finishes last
            await asyncio.sleep(0.02 if keys[0] == "a" else 0)
            return keys

        resolver = BatchResolver(resolve_chunk, chunk_size=2)

        assert await resolver.resolve(["a", "b", "c", "d"]) == ["a", "b", "c", "d"]

    async def test_one_failing_chunk_fails_whole_call(self) -> None:
        """Should raise when any chunk fails, after all chunks settle."""
        completed: list[str] = []

        async def resolve_chunk(keys: list[str]) -> list[str]:
            if keys[0] == "c":
                raise UpstreamTimeoutError("shopify", "slow")
            await asyncio.sleep(0)
            completed.append(keys[0])
            return keys

        resolver = BatchResolver(resolve_chunk, chunk_size=2)

        with pytest.raises(UpstreamTimeoutError):
            await resolver.resolve(["a", "b", "c", "d", "e"])

        assert sorted(completed) == ["a", "e"]

    def test_rejects_non_positive_chunk_size(self) -> None:
        """Should refuse a zero chunk size."""
        with pytest.raises(ValueError, match="chunk size must be positive"):
            BatchResolver(_echo, chunk_size=0)
