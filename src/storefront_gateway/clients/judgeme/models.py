"""Judge.me review records as returned by ``GET /reviews``.

Only the fields the gateway reads are declared; everything else in the
upstream payload (reviewer email, IP address, moderation flags, ...) is dropped
at parse time.
"""

from __future__ import annotations

from pydantic import Field

from storefront_gateway.schemas.base import DownstreamResponse


class JudgeMePictureUrls(DownstreamResponse):
    huge: str | None = None
    compact: str | None = None


class JudgeMePicture(DownstreamResponse):
    urls: JudgeMePictureUrls | None = None


class JudgeMeReviewer(DownstreamResponse):
    name: str | None = None


class JudgeMeReview(DownstreamResponse):
    """One raw review."""

    rating: int | None = None
    published: bool | None = False
    created_at: str | None = None
    product_handle: str | None = None
    product_title: str | None = None
    title: str | None = None
    body: str | None = None
    reviewer: JudgeMeReviewer | None = None
    pictures: list[JudgeMePicture] | None = Field(default=None)
