"""Shopify Admin GraphQL client package."""

from storefront_gateway.clients.shopify.client import ShopifyClient
from storefront_gateway.clients.shopify.models import (
    ShopifyConnection,
    ShopifyImage,
    ShopifyInventoryItem,
    ShopifyMetafield,
    ShopifyProduct,
    ShopifyProductReference,
    ShopifyProductsData,
    ShopifyVariant,
)
from storefront_gateway.clients.shopify.queries import (
    PRODUCT_PRICING_QUERY,
    PRODUCTS_BY_HANDLE_QUERY,
    handle_search,
)


__all__ = [
    "PRODUCTS_BY_HANDLE_QUERY",
    "PRODUCT_PRICING_QUERY",
    "ShopifyClient",
    "ShopifyConnection",
    "ShopifyImage",
    "ShopifyInventoryItem",
    "ShopifyMetafield",
    "ShopifyProduct",
    "ShopifyProductReference",
    "ShopifyProductsData",
    "ShopifyVariant",
    "handle_search",
]
