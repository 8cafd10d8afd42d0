"""Reviews endpoint.

Serves the published review dataset from the in-memory snapshot, refreshing
it from Judge.me when it has expired.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import APIRouter, Depends, Response

from storefront_gateway.api.dependencies import get_reviews_service
from storefront_gateway.clients.exceptions import UpstreamError
from storefront_gateway.core.exceptions import upstream_exception
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.schemas.review import ReviewsResponse
from storefront_gateway.services.reviews.service import ReviewsService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["Reviews"])

FRESH_CACHE_CONTROL: Final[str] = "public, max-age=86400"


@router.get(
    "/reviews",
    response_model=ReviewsResponse,
    summary="List published reviews",
    description=(
        "Returns every published review rated four stars or more. The dataset is "
        "cached for 24 hours; if a refresh fails the previous dataset is served."
    ),
    responses={
        502: {"description": "Judge.me failed and no cached dataset exists"},
        504: {"description": "Judge.me timed out and no cached dataset exists"},
    },
)
async def list_reviews(
    response: Response,
    reviews_service: Annotated[ReviewsService, Depends(get_reviews_service)],
) -> ReviewsResponse:
    """Return the review dataset.

    Raises:
        GatewayTimeoutException: 504 if Judge.me timed out with nothing cached.
        BadGatewayException: 502 for any other upstream failure with nothing cached.
    """
    try:
        result = await reviews_service.fetch_reviews()
    except UpstreamError as e:
        raise upstream_exception(e) from e

    if result.stale:
        response.headers["Cache-Control"] = "no-store"
    else:
        response.headers["Cache-Control"] = FRESH_CACHE_CONTROL

    return ReviewsResponse(reviews=list(result.reviews))
