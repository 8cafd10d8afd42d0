"""Single-slot in-memory cache with age-based freshness.

The cache holds exactly one dataset snapshot. Entries are replaced wholesale on
every successful refresh and are never deleted, so a stale snapshot stays
available as a fallback until the process exits.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Generic, TypeVar


T = TypeVar("T")

DEFAULT_TTL_SECONDS: Final[float] = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached payload and the clock reading at which it was fetched."""

    payload: T
    fetched_at: float


@dataclass(frozen=True, slots=True)
class CachedValue(Generic[T]):
    """Result of a cache read: the payload and its age in seconds."""

    payload: T
    age: float


class TTLCache(Generic[T]):
    """Holds one snapshot; callers decide what to do with stale data.

    Args:
        ttl: Freshness window in seconds.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self._ttl = ttl
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def read(self) -> CachedValue[T] | None:
        """Return the stored payload with its current age, or None when empty."""
        entry = self._entry
        if entry is None:
            return None
        return CachedValue(payload=entry.payload, age=self._clock() - entry.fetched_at)

    def write(self, payload: T) -> CacheEntry[T]:
        """Replace the stored entry with ``(payload, now)``."""
        entry = CacheEntry(payload=payload, fetched_at=self._clock())
        self._entry = entry
        return entry

    def is_fresh(self, value: CachedValue[T] | None) -> bool:
        """True when a read result exists and is younger than the TTL."""
        return value is not None and value.age < self._ttl
