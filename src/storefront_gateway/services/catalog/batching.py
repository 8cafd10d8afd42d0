"""Chunked, concurrent resolution of large key sets."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Generic, TypeVar

from storefront_gateway.observability.logging import get_logger


K = TypeVar("K")
T = TypeVar("T")

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 50


def chunked(items: Sequence[K], size: int) -> list[list[K]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements."""
    if size <= 0:
        msg = f"chunk size must be positive, got {size}"
        raise ValueError(msg)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class BatchResolver(Generic[K, T]):
    """Resolve keys against an upstream that caps keys per query.

    Keys are de-duplicated, split into chunks and every chunk is queried
    concurrently. The call succeeds only if every chunk succeeds; results are
    concatenated chunk by chunk in the order the upstream returned them, which
    need not match key order.

    Args:
        resolve_chunk: Coroutine function resolving one chunk of keys.
        chunk_size: Maximum keys per upstream query.
    """

    def __init__(
        self,
        resolve_chunk: Callable[[list[K]], Awaitable[list[T]]],
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            msg = f"chunk size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self._resolve_chunk = resolve_chunk
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    async def resolve(self, keys: Iterable[K]) -> list[T]:
        """Resolve all keys; raises the first chunk failure if any chunk fails."""
        unique = list(dict.fromkeys(keys))
        if not unique:
            return []

        chunks = chunked(unique, self._chunk_size)
        logger.debug(
            "Resolving keys in chunks",
            keys=len(unique),
            chunks=len(chunks),
            chunk_size=self._chunk_size,
        )

        results = await asyncio.gather(
            *(self._resolve_chunk(chunk) for chunk in chunks),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(
                "Chunk resolution failed",
                failed_chunks=len(failures),
                chunks=len(chunks),
            )
            raise failures[0]

        return [item for chunk_result in results for item in chunk_result]
