"""Price, unit-conversion and stock-display derivation."""

from storefront_gateway.services.pricing.engine import (
    PriceDerivationEngine,
    classify_stock,
    conversion_factor,
    price_per_base_unit,
    unit_display,
)
from storefront_gateway.services.pricing.exceptions import (
    PriceNotFoundError,
    PricingError,
    ProductNotFoundError,
    VariantNotFoundError,
)
from storefront_gateway.services.pricing.service import PricingService


__all__ = [
    "PriceDerivationEngine",
    "PriceNotFoundError",
    "PricingError",
    "PricingService",
    "ProductNotFoundError",
    "VariantNotFoundError",
    "classify_stock",
    "conversion_factor",
    "price_per_base_unit",
    "unit_display",
]
