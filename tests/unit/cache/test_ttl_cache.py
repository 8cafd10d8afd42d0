"""Unit tests for the single-slot TTL cache."""

from __future__ import annotations

import pytest

from storefront_gateway.cache import DEFAULT_TTL_SECONDS, TTLCache


pytestmark = pytest.mark.unit


class TestTTLCache:
    """Tests for TTLCache."""

    def test_empty_cache_reads_none(self, clock) -> None:
        """Should return None before anything is written."""
        cache: TTLCache[str] = TTLCache(ttl=60, clock=clock)

        assert cache.read() is None
        assert cache.is_fresh(cache.read()) is False

    def test_default_ttl_is_one_day(self) -> None:
        """Should default to 24 hours."""
        assert TTLCache().ttl == DEFAULT_TTL_SECONDS == 86400

    def test_rejects_non_positive_ttl(self) -> None:
        """Should refuse a zero or negative TTL."""
        with pytest.raises(ValueError, match="ttl must be positive"):
            TTLCache(ttl=0)

    def test_write_then_read_reports_age(self, clock) -> None:
        """Should report the age of the stored payload."""
        cache: TTLCache[str] = TTLCache(ttl=60, clock=clock)
        cache.write("snapshot")

        clock.advance(15)
        value = cache.read()

        assert value is not None
        assert value.payload == "snapshot"
        assert value.age == 15

    def test_fresh_until_ttl_elapses(self, clock) -> None:
        """Should be fresh strictly before the TTL and stale at it."""
        cache: TTLCache[str] = TTLCache(ttl=60, clock=clock)
        cache.write("snapshot")

        clock.advance(59.9)
        assert cache.is_fresh(cache.read()) is True

        clock.advance(0.1)
        assert cache.is_fresh(cache.read()) is False

    def test_stale_entry_is_still_readable(self, clock) -> None:
        """Should keep serving an expired payload until it is replaced."""
        cache: TTLCache[str] = TTLCache(ttl=60, clock=clock)
        cache.write("old")

        clock.advance(3600)

        value = cache.read()
        assert value is not None
        assert value.payload == "old"

    def test_write_replaces_entry_and_resets_age(self, clock) -> None:
        """Should replace the payload wholesale and restart the age."""
        cache: TTLCache[str] = TTLCache(ttl=60, clock=clock)
        cache.write("old")
        clock.advance(120)

        entry = cache.write("new")
        value = cache.read()

        assert entry.fetched_at == clock.now
        assert value is not None
        assert value.payload == "new"
        assert value.age == 0
