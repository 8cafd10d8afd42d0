"""Mappers projecting upstream records onto public schemas."""

from storefront_gateway.mappers.product import find_parent_product, to_product_summary
from storefront_gateway.mappers.review import is_publishable, sanitize_reviews, to_review


__all__ = [
    "find_parent_product",
    "is_publishable",
    "sanitize_reviews",
    "to_product_summary",
    "to_review",
]
