"""Product pricing endpoint.

Derives the storefront price block (per-base-unit price, stock notice and
unit labels) for a single product.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from storefront_gateway.api.dependencies import get_pricing_service
from storefront_gateway.clients.exceptions import UpstreamError
from storefront_gateway.core.exceptions import (
    BadRequestException,
    NotFoundException,
    upstream_exception,
)
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.schemas.pricing import PriceInfo
from storefront_gateway.services.catalog.exceptions import CatalogValidationError
from storefront_gateway.services.pricing.exceptions import (
    PriceNotFoundError,
    ProductNotFoundError,
)
from storefront_gateway.services.pricing.service import PricingService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["Pricing"])


@router.get(
    "/products/{handle}/price",
    response_model=PriceInfo,
    summary="Get derived pricing for a product",
    description=(
        "Returns the current and compare-at price together with the price per "
        "base unit, stock notice and unit labels derived from product metafields."
    ),
    responses={
        400: {"description": "Malformed product handle"},
        404: {
            "description": "Product or variant not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": "PRODUCT_NOT_FOUND",
                        "message": "Product 'oak-plank-tile' not found",
                    }
                }
            },
        },
        502: {"description": "Shopify request failed"},
        504: {"description": "Shopify request timed out"},
    },
)
async def get_product_price(
    handle: Annotated[str, Path(description="Product handle")],
    pricing_service: Annotated[PricingService, Depends(get_pricing_service)],
) -> PriceInfo:
    """Derive pricing for ``handle``.

    Raises:
        BadRequestException: 400 if the handle is malformed.
        NotFoundException: 404 if the product or its variant does not exist.
        GatewayTimeoutException: 504 if Shopify timed out.
        BadGatewayException: 502 for any other Shopify failure.
    """
    try:
        return await pricing_service.derive_price(handle)
    except CatalogValidationError as e:
        raise BadRequestException(str(e), error="INVALID_HANDLE") from e
    except ProductNotFoundError as e:
        raise NotFoundException(str(e), error="PRODUCT_NOT_FOUND") from e
    except PriceNotFoundError as e:
        raise NotFoundException(str(e), error="VARIANT_NOT_FOUND") from e
    except UpstreamError as e:
        raise upstream_exception(e) from e
