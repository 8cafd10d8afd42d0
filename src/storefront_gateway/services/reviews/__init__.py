"""Cached, sanitised customer reviews."""

from storefront_gateway.services.reviews.paginator import PaginatedFetcher
from storefront_gateway.services.reviews.service import ReviewsResult, ReviewsService


__all__ = [
    "PaginatedFetcher",
    "ReviewsResult",
    "ReviewsService",
]
