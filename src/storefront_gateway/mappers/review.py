"""Review mappers.

Projects raw Judge.me reviews onto the public ``Review`` shape. Only the fields
named here reach the storefront.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from storefront_gateway.schemas.review import Review, ReviewPicture


if TYPE_CHECKING:
    from storefront_gateway.clients.judgeme.models import JudgeMePicture, JudgeMeReview


DEFAULT_MIN_RATING = 4
MAX_RATING = 5


def is_publishable(review: JudgeMeReview, min_rating: int = DEFAULT_MIN_RATING) -> bool:
    """Published reviews rated from ``min_rating`` to five stars are shown.

    Reviews without a rating, or rated outside the star scale, are never shown.
    """
    if review.published is not True or review.rating is None:
        return False
    return min_rating <= review.rating <= MAX_RATING


def to_review_picture(picture: JudgeMePicture) -> ReviewPicture:
    urls = picture.urls
    if urls is None:
        return ReviewPicture()
    return ReviewPicture(huge_url=urls.huge, compact_url=urls.compact)


def to_review(review: JudgeMeReview) -> Review:
    """Build the public view of one raw review."""
    return Review(
        rating=review.rating,
        created_at=review.created_at,
        product_handle=review.product_handle,
        product_title=review.product_title,
        title=review.title,
        body=review.body,
        reviewer_name=review.reviewer.name if review.reviewer else None,
        pictures=tuple(to_review_picture(p) for p in review.pictures or ()),
    )


def sanitize_reviews(
    reviews: Iterable[JudgeMeReview],
    min_rating: int = DEFAULT_MIN_RATING,
) -> list[Review]:
    """Filter to publishable reviews, then project each onto the public shape.

    Upstream order is preserved.
    """
    return [to_review(r) for r in reviews if is_publishable(r, min_rating)]
