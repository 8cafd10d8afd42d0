"""Cached reviews service.

Serves the storefront's review dataset from a single in-memory snapshot:
- fresh snapshot: returned without contacting Judge.me
- missing or stale snapshot: one refresh runs (concurrent callers share it)
- refresh failure with any snapshot present: the old snapshot is served
- refresh failure with nothing cached: the upstream error propagates
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from storefront_gateway.cache import DEFAULT_TTL_SECONDS, SingleFlight, TTLCache
from storefront_gateway.clients.exceptions import UpstreamError
from storefront_gateway.mappers.review import DEFAULT_MIN_RATING, sanitize_reviews
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.services.reviews.paginator import PaginatedFetcher


if TYPE_CHECKING:
    from storefront_gateway.clients.judgeme.client import JudgeMeClient
    from storefront_gateway.clients.judgeme.models import JudgeMeReview
    from storefront_gateway.schemas.review import Review

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ReviewsResult:
    """Reviews plus where they came from.

    ``stale`` is True when the snapshot was served because a refresh failed.
    ``age`` is the snapshot age in seconds at the time of the call.
    """

    reviews: tuple[Review, ...]
    stale: bool = False
    age: float = 0.0


class ReviewsService:
    """Owns the review snapshot and the refresh that fills it."""

    REFRESH_KEY: Final[str] = "reviews"

    def __init__(
        self,
        client: JudgeMeClient,
        *,
        page_size: int = 100,
        max_pages: int = 200,
        cache_ttl: float = DEFAULT_TTL_SECONDS,
        min_rating: int = DEFAULT_MIN_RATING,
        cache: TTLCache[tuple[Review, ...]] | None = None,
    ) -> None:
        self._fetcher: PaginatedFetcher[JudgeMeReview] = PaginatedFetcher(
            client.list_reviews,
            service=client.SERVICE_NAME,
            page_size=page_size,
            max_pages=max_pages,
        )
        self._cache = cache if cache is not None else TTLCache(ttl=cache_ttl)
        self._flight = SingleFlight()
        self._min_rating = min_rating

    def cache_age(self) -> float | None:
        """Age in seconds of the current snapshot, or None before the first refresh."""
        cached = self._cache.read()
        return cached.age if cached is not None else None

    async def fetch_reviews(self) -> ReviewsResult:
        """Return the review dataset, refreshing it when needed.

        Raises:
            UpstreamError: If the refresh fails and no snapshot exists yet.
        """
        cached = self._cache.read()
        if cached is not None and self._cache.is_fresh(cached):
            logger.debug("Cache hit for reviews", age=round(cached.age, 1))
            return ReviewsResult(reviews=cached.payload, age=cached.age)

        try:
            reviews = await self.refresh()
        except UpstreamError as e:
            fallback = self._cache.read()
            if fallback is None:
                logger.error("Reviews refresh failed with no cached data", error=str(e))
                raise
            logger.warning(
                "Reviews refresh failed - serving stale data",
                error=str(e),
                age=round(fallback.age, 1),
                count=len(fallback.payload),
            )
            return ReviewsResult(reviews=fallback.payload, stale=True, age=fallback.age)

        return ReviewsResult(reviews=reviews)

    async def refresh(self) -> tuple[Review, ...]:
        """Fetch the full dataset and replace the snapshot.

        Concurrent calls are coalesced into one upstream run.
        """
        return await self._flight.do(self.REFRESH_KEY, self._refresh)

    async def _refresh(self) -> tuple[Review, ...]:
        logger.info("Refreshing reviews from upstream")
        raw_reviews = await self._fetcher.fetch_all()
        reviews = tuple(sanitize_reviews(raw_reviews, self._min_rating))
        self._cache.write(reviews)
        logger.info(
            "Reviews refreshed",
            fetched=len(raw_reviews),
            published=len(reviews),
        )
        return reviews
