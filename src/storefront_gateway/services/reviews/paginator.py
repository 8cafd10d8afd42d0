"""Full-collection fetch over a page-numbered upstream listing."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from storefront_gateway.clients.exceptions import PaginationLimitError
from storefront_gateway.observability.logging import get_logger


T = TypeVar("T")

logger = get_logger(__name__)

PageFetch = Callable[[int, int], Awaitable[list[T]]]


class PaginatedFetcher(Generic[T]):
    """Pull every record from a listing that pages from 1 upward.

    Fetching stops at the first page holding fewer than ``page_size`` records
    (an empty page included). Pages are requested one after another and any
    page error aborts the run; nothing accumulated so far is returned.

    Args:
        fetch_page: Coroutine function called as ``fetch_page(page, page_size)``.
        service: Upstream name used in errors.
        page_size: Records requested per page.
        max_pages: Ceiling on pages per run; reaching it without a short page
            raises ``PaginationLimitError``.
    """

    def __init__(
        self,
        fetch_page: PageFetch[T],
        *,
        service: str,
        page_size: int = 100,
        max_pages: int = 200,
    ) -> None:
        if page_size <= 0 or max_pages <= 0:
            msg = "page_size and max_pages must be positive"
            raise ValueError(msg)
        self._fetch_page = fetch_page
        self._service = service
        self._page_size = page_size
        self._max_pages = max_pages

    @property
    def page_size(self) -> int:
        return self._page_size

    async def fetch_all(self) -> list[T]:
        """Fetch all pages and return the records in upstream order.

        Raises:
            PaginationLimitError: If ``max_pages`` full pages were returned.
            UpstreamError: Whatever ``fetch_page`` raises, unchanged.
        """
        records: list[T] = []
        for page in range(1, self._max_pages + 1):
            batch = await self._fetch_page(page, self._page_size)
            records.extend(batch)
            if len(batch) < self._page_size:
                logger.debug(
                    "Pagination complete",
                    service=self._service,
                    pages=page,
                    records=len(records),
                )
                return records

        logger.error(
            "Pagination exceeded page ceiling",
            service=self._service,
            max_pages=self._max_pages,
            records=len(records),
        )
        raise PaginationLimitError(self._service, self._max_pages)
