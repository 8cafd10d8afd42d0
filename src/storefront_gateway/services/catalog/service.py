"""Catalog lookup service.

Resolves storefront product handles into public product summaries, querying
Shopify in chunks sized to its query-complexity limits.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Final

from storefront_gateway.clients.shopify.queries import PRODUCTS_BY_HANDLE_QUERY, handle_search
from storefront_gateway.mappers.product import to_product_summary
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.services.catalog.batching import DEFAULT_CHUNK_SIZE, BatchResolver
from storefront_gateway.services.catalog.exceptions import CatalogValidationError


if TYPE_CHECKING:
    from storefront_gateway.clients.shopify.client import ShopifyClient
    from storefront_gateway.clients.shopify.models import ShopifyProduct
    from storefront_gateway.schemas.product import ProductSummary

logger = get_logger(__name__)

HANDLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,254}$")


def validate_handles(handles: object, max_handles: int) -> list[str]:
    """Check lookup input before anything is sent upstream.

    Args:
        handles: Caller-supplied handles; must be a sequence of strings.
        max_handles: Largest accepted request.

    Returns:
        The handles as a list, in caller order.

    Raises:
        CatalogValidationError: If the input is not a sequence, is too large, or
            contains anything other than well-formed handles.
    """
    if isinstance(handles, (str, bytes)) or not isinstance(handles, Sequence):
        msg = "handles must be a list of strings"
        raise CatalogValidationError(msg)

    if len(handles) > max_handles:
        msg = f"too many handles: {len(handles)} (max {max_handles})"
        raise CatalogValidationError(msg)

    invalid = [h for h in handles if not isinstance(h, str) or not HANDLE_PATTERN.match(h)]
    if invalid:
        msg = f"{len(invalid)} invalid product handle(s)"
        raise CatalogValidationError(msg, invalid=invalid[:10])

    return list(handles)


class CatalogService:
    """Batch product lookup by handle."""

    def __init__(
        self,
        client: ShopifyClient,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_handles: int = 500,
        metafield_namespace: str = "custom",
        parent_product_metafield: str = "custom.parent_product",
    ) -> None:
        self._client = client
        self._max_handles = max_handles
        self._namespace = metafield_namespace
        self._parent_key = parent_product_metafield
        self._resolver: BatchResolver[str, ShopifyProduct] = BatchResolver(
            self._fetch_chunk,
            chunk_size=chunk_size,
        )

    async def resolve_products(self, handles: Sequence[str]) -> list[ProductSummary]:
        """Resolve handles to product summaries.

        Handles with no matching product are omitted. Result order follows the
        upstream responses, not ``handles``.

        Raises:
            CatalogValidationError: Before any upstream call, for bad input.
            UpstreamError: If any chunk query fails.
        """
        validated = validate_handles(handles, self._max_handles)
        products = await self._resolver.resolve(validated)

        logger.info(
            "Resolved products",
            requested=len(validated),
            resolved=len(products),
        )
        return [to_product_summary(p, self._parent_key) for p in products]

    async def _fetch_chunk(self, handles: list[str]) -> list[ShopifyProduct]:
        products = await self._client.fetch_products(
            PRODUCTS_BY_HANDLE_QUERY,
            {
                "query": handle_search(handles),
                "first": len(handles),
                "namespace": self._namespace,
            },
            operation="productsByHandle",
        )
        # Product search is fuzzy; keep exact handle matches only
        wanted = set(handles)
        return [p for p in products if p.handle in wanted]
