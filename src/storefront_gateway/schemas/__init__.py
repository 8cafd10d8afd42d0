"""Pydantic schemas for the public API surface."""

from storefront_gateway.schemas.base import APIRequest, APIResponse, DownstreamResponse
from storefront_gateway.schemas.pricing import (
    InventoryInfo,
    PriceInfo,
    PricePerBaseUnit,
    StockNotice,
    UnitDisplay,
)
from storefront_gateway.schemas.product import (
    ParentProduct,
    ProductLookupRequest,
    ProductLookupResponse,
    ProductSummary,
)
from storefront_gateway.schemas.review import Review, ReviewPicture, ReviewsResponse


__all__ = [
    "APIRequest",
    "APIResponse",
    "DownstreamResponse",
    "InventoryInfo",
    "ParentProduct",
    "PriceInfo",
    "PricePerBaseUnit",
    "ProductLookupRequest",
    "ProductLookupResponse",
    "ProductSummary",
    "Review",
    "ReviewPicture",
    "ReviewsResponse",
    "StockNotice",
    "UnitDisplay",
]
