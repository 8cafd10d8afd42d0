"""Coalescing of concurrent identical async calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from storefront_gateway.observability.logging import get_logger


T = TypeVar("T")

logger = get_logger(__name__)


class SingleFlight:
    """Run at most one call per key at a time.

    The first caller for a key starts the work as a task; callers arriving while
    it runs await the same task and receive the same result or exception. The
    shared task is shielded, so a cancelled waiter does not cancel it for the
    others.
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Run ``fn`` under ``key`` or join the call already running."""
        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(fn())
            self._inflight[key] = future
            future.add_done_callback(lambda done: self._forget(key, done))
        else:
            logger.debug("Joining in-flight call", key=key)

        return await asyncio.shield(future)

    def _forget(self, key: str, done: asyncio.Future[Any]) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]
