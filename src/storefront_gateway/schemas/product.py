"""Product lookup request/response schemas."""

from __future__ import annotations

from pydantic import Field

from storefront_gateway.schemas.base import APIRequest, APIResponse


class ParentProduct(APIResponse):
    """Related product a variant-style listing points back to."""

    title: str | None = None
    url: str | None = None


class ProductSummary(APIResponse):
    """Minimal public view of a catalog product."""

    handle: str
    title: str
    featured_image_url: str | None = None
    url: str | None = None
    parent_product: ParentProduct | None = None


class ProductLookupRequest(APIRequest):
    """Request body for batch product lookup."""

    handles: list[str] = Field(
        ...,
        description="Product handles to resolve",
        examples=[["oak-plank-tile", "carrara-hex-mosaic"]],
    )


class ProductLookupResponse(APIResponse):
    """Response body for batch product lookup."""

    products: list[ProductSummary] = Field(default_factory=list)
