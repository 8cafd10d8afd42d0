"""Pricing service: fetch one catalog record and derive its price block."""

from __future__ import annotations

from typing import TYPE_CHECKING

from storefront_gateway.clients.shopify.queries import PRODUCT_PRICING_QUERY, handle_search
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.services.catalog.service import validate_handles
from storefront_gateway.services.pricing.engine import PriceDerivationEngine
from storefront_gateway.services.pricing.exceptions import ProductNotFoundError


if TYPE_CHECKING:
    from storefront_gateway.clients.shopify.client import ShopifyClient
    from storefront_gateway.schemas.pricing import PriceInfo

logger = get_logger(__name__)


class PricingService:
    """Derives storefront pricing for a product handle."""

    def __init__(
        self,
        client: ShopifyClient,
        *,
        metafield_namespace: str = "custom",
        engine: PriceDerivationEngine | None = None,
    ) -> None:
        self._client = client
        self._namespace = metafield_namespace
        self._engine = engine or PriceDerivationEngine(metafield_namespace)

    async def derive_price(self, handle: str) -> PriceInfo:
        """Fetch ``handle`` and derive its price information.

        Raises:
            CatalogValidationError: If ``handle`` is malformed (no upstream call).
            ProductNotFoundError: If no product has this handle.
            VariantNotFoundError: If the product has no variants.
            UpstreamError: If the catalog query fails.
        """
        (handle,) = validate_handles([handle], max_handles=1)

        products = await self._client.fetch_products(
            PRODUCT_PRICING_QUERY,
            {"query": handle_search([handle]), "namespace": self._namespace},
            operation="productPricing",
        )
        product = next((p for p in products if p.handle == handle), None)
        if product is None:
            logger.info("Product not found for pricing", handle=handle)
            raise ProductNotFoundError(handle)

        price_info = self._engine.derive(product)
        logger.debug(
            "Derived price",
            handle=handle,
            current_price=str(price_info.current_price),
            conversion_factor=str(price_info.conversion_factor),
        )
        return price_info
