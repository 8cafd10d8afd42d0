"""GraphQL documents sent to the Shopify Admin API."""

from __future__ import annotations

from typing import Final


PRODUCTS_BY_HANDLE_QUERY: Final[str] = """
query ProductsByHandle($query: String!, $first: Int!, $namespace: String!) {
  products(first: $first, query: $query) {
    nodes {
      handle
      title
      onlineStoreUrl
      featuredImage {
        url
      }
      metafields(first: 50, namespace: $namespace) {
        nodes {
          namespace
          key
          value
          reference {
            ... on Product {
              title
              handle
              onlineStoreUrl
            }
          }
        }
      }
    }
  }
}
"""

PRODUCT_PRICING_QUERY: Final[str] = """
query ProductPricing($query: String!, $namespace: String!) {
  products(first: 1, query: $query) {
    nodes {
      handle
      title
      status
      productType
      metafields(first: 50, namespace: $namespace) {
        nodes {
          namespace
          key
          value
        }
      }
      variants(first: 1) {
        nodes {
          price
          compareAtPrice
          inventoryQuantity
          inventoryPolicy
          inventoryItem {
            tracked
          }
        }
      }
    }
  }
}
"""


def handle_search(handles: list[str]) -> str:
    """Build a product search string matching any of ``handles``.

    Handles must already be validated against the handle alphabet.
    """
    return " OR ".join(f"handle:{handle}" for handle in handles)
