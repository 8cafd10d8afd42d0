"""Catalog product mappers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront_gateway.schemas.product import ParentProduct, ProductSummary


if TYPE_CHECKING:
    from storefront_gateway.clients.shopify.models import ShopifyProduct


def find_parent_product(product: ShopifyProduct, metafield_key: str) -> ParentProduct | None:
    """Locate the related product referenced by ``metafield_key``.

    Args:
        product: Raw catalog record.
        metafield_key: ``namespace.key`` of the product-reference metafield.

    Returns:
        The referenced product, or None when the metafield is missing, empty or
        points at something that is not a product.
    """
    metafield = product.find_metafield(metafield_key)
    if metafield is None or metafield.reference is None:
        return None

    reference = metafield.reference
    if reference.title is None and reference.online_store_url is None:
        return None
    return ParentProduct(title=reference.title, url=reference.online_store_url)


def to_product_summary(product: ShopifyProduct, parent_metafield_key: str) -> ProductSummary:
    """Build the public summary of a catalog record."""
    return ProductSummary(
        handle=product.handle,
        title=product.title,
        featured_image_url=product.featured_image.url if product.featured_image else None,
        url=product.online_store_url,
        parent_product=find_parent_product(product, parent_metafield_key),
    )
