"""In-memory caching primitives.

This module provides:
- TTLCache: a single-snapshot cache with age-based freshness
- SingleFlight: coalescing of concurrent refreshes
"""

from storefront_gateway.cache.single_flight import SingleFlight
from storefront_gateway.cache.ttl import (
    DEFAULT_TTL_SECONDS,
    CachedValue,
    CacheEntry,
    TTLCache,
)


__all__ = [
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "CachedValue",
    "SingleFlight",
    "TTLCache",
]
