"""Public review schemas returned to the storefront."""

from __future__ import annotations

from pydantic import Field

from storefront_gateway.schemas.base import APIResponse


class ReviewPicture(APIResponse):
    """Image attached to a review."""

    huge_url: str | None = Field(default=None, description="Full-size image URL")
    compact_url: str | None = Field(default=None, description="Thumbnail URL")


class Review(APIResponse):
    """A published customer review."""

    rating: int = Field(..., ge=0, le=5, description="Star rating")
    created_at: str | None = Field(default=None, description="ISO-8601 timestamp")
    product_handle: str | None = None
    product_title: str | None = None
    title: str | None = None
    body: str | None = None
    reviewer_name: str | None = None
    pictures: tuple[ReviewPicture, ...] = ()


class ReviewsResponse(APIResponse):
    """Response body for the reviews endpoint."""

    reviews: list[Review] = Field(default_factory=list)
