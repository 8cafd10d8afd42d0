"""Unit tests for PaginatedFetcher."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from storefront_gateway.clients.exceptions import (
    PaginationLimitError,
    UpstreamHTTPError,
)
from storefront_gateway.services.reviews.paginator import PaginatedFetcher


pytestmark = pytest.mark.unit


def _pages(total: int, page_size: int) -> AsyncMock:
    """Fake page fetcher over ``total`` integer records."""

    async def fetch_page(page: int, per_page: int) -> list[int]:
        start = (page - 1) * per_page
        return list(range(start, min(start + per_page, total)))

    return AsyncMock(side_effect=fetch_page)


class TestPaginatedFetcher:
    """Tests for fetch_all."""

    async def test_fetches_until_short_page(self) -> None:
        """Should request 3 pages for 250 records at 100 per page."""
        fetch_page = _pages(250, 100)
        fetcher = PaginatedFetcher(fetch_page, service="test", page_size=100)

        records = await fetcher.fetch_all()

        assert records == list(range(250))
        assert [c.args for c in fetch_page.await_args_list] == [
            (1, 100),
            (2, 100),
            (3, 100),
        ]

    async def test_exact_multiple_needs_trailing_empty_page(self) -> None:
        """Should stop at the empty page after an exact multiple of page_size."""
        fetch_page = _pages(200, 100)
        fetcher = PaginatedFetcher(fetch_page, service="test", page_size=100)

        records = await fetcher.fetch_all()

        assert len(records) == 200
        assert fetch_page.await_count == 3

    async def test_empty_listing(self) -> None:
        """Should return nothing after a single empty page."""
        fetch_page = _pages(0, 100)
        fetcher = PaginatedFetcher(fetch_page, service="test")

        assert await fetcher.fetch_all() == []
        assert fetch_page.await_count == 1

    async def test_page_ceiling_raises(self) -> None:
        """Should raise once max_pages full pages came back."""
        fetch_page = _pages(10_000, 10)
        fetcher = PaginatedFetcher(fetch_page, service="test", page_size=10, max_pages=3)

        with pytest.raises(PaginationLimitError) as exc_info:
            await fetcher.fetch_all()

        assert exc_info.value.max_pages == 3
        assert fetch_page.await_count == 3

    async def test_page_error_aborts_run(self) -> None:
        """Should propagate a page failure without requesting further pages."""
        fetch_page = AsyncMock(
            side_effect=[list(range(100)), UpstreamHTTPError("test", "boom", 500)]
        )
        fetcher = PaginatedFetcher(fetch_page, service="test", page_size=100)

        with pytest.raises(UpstreamHTTPError):
            await fetcher.fetch_all()

        assert fetch_page.await_count == 2

    def test_rejects_non_positive_bounds(self) -> None:
        """Should refuse a zero page size or page ceiling."""
        with pytest.raises(ValueError, match="must be positive"):
            PaginatedFetcher(AsyncMock(), service="test", page_size=0)
        with pytest.raises(ValueError, match="must be positive"):
            PaginatedFetcher(AsyncMock(), service="test", max_pages=0)
