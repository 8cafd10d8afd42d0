"""Shopify Admin GraphQL product records.

GraphQL already returns camelCase keys, which the shared alias generator maps
onto the snake_case attributes below.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import Field

from storefront_gateway.schemas.base import DownstreamResponse


NodeT = TypeVar("NodeT")


class ShopifyConnection(DownstreamResponse, Generic[NodeT]):
    """A GraphQL connection queried through its ``nodes`` field."""

    nodes: list[NodeT] = Field(default_factory=list)


class ShopifyImage(DownstreamResponse):
    url: str | None = None


class ShopifyProductReference(DownstreamResponse):
    """Target of a product-reference metafield (``... on Product``)."""

    title: str | None = None
    handle: str | None = None
    online_store_url: str | None = None


class ShopifyMetafield(DownstreamResponse):
    namespace: str
    key: str
    value: str | None = None
    reference: ShopifyProductReference | None = None

    @property
    def full_key(self) -> str:
        return f"{self.namespace}.{self.key}"


class ShopifyInventoryItem(DownstreamResponse):
    tracked: bool = False


class ShopifyVariant(DownstreamResponse):
    price: Decimal
    compare_at_price: Decimal | None = None
    inventory_quantity: int | None = None
    inventory_policy: str = "DENY"
    inventory_item: ShopifyInventoryItem | None = None


class ShopifyProduct(DownstreamResponse):
    handle: str
    title: str
    status: str | None = None
    product_type: str | None = None
    online_store_url: str | None = None
    featured_image: ShopifyImage | None = None
    metafields: ShopifyConnection[ShopifyMetafield] = Field(
        default_factory=ShopifyConnection[ShopifyMetafield]
    )
    variants: ShopifyConnection[ShopifyVariant] = Field(
        default_factory=ShopifyConnection[ShopifyVariant]
    )

    def find_metafield(self, full_key: str) -> ShopifyMetafield | None:
        """Return the first metafield whose ``namespace.key`` equals ``full_key``."""
        return next(
            (m for m in self.metafields.nodes if m.full_key == full_key),
            None,
        )

    def metafield_values(self, namespace: str) -> dict[str, str]:
        """Map of key to raw value for non-empty metafields in ``namespace``."""
        return {
            m.key: m.value
            for m in self.metafields.nodes
            if m.namespace == namespace and m.value is not None
        }


class ShopifyProductsData(DownstreamResponse):
    """``data`` payload of a ``products(...)`` query."""

    products: ShopifyConnection[ShopifyProduct]
