"""Batch product lookup against the Shopify catalog."""

from storefront_gateway.services.catalog.batching import BatchResolver, chunked
from storefront_gateway.services.catalog.exceptions import (
    CatalogError,
    CatalogValidationError,
)
from storefront_gateway.services.catalog.service import CatalogService, validate_handles


__all__ = [
    "BatchResolver",
    "CatalogError",
    "CatalogService",
    "CatalogValidationError",
    "chunked",
    "validate_handles",
]
