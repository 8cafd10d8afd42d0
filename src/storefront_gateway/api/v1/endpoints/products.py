"""Product lookup endpoint.

Resolves a list of storefront product handles into public product summaries.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront_gateway.api.dependencies import get_catalog_service
from storefront_gateway.clients.exceptions import UpstreamError
from storefront_gateway.core.exceptions import (
    BadRequestException,
    ErrorDetail,
    upstream_exception,
)
from storefront_gateway.observability.logging import get_logger
from storefront_gateway.schemas.product import ProductLookupRequest, ProductLookupResponse
from storefront_gateway.services.catalog.exceptions import CatalogValidationError
from storefront_gateway.services.catalog.service import CatalogService  # noqa: TC001


logger = get_logger(__name__)

router = APIRouter(tags=["Products"])


@router.post(
    "/products/lookup",
    response_model=ProductLookupResponse,
    summary="Resolve product handles",
    description=(
        "Looks up products by handle and returns their public summary. Handles "
        "with no matching product are omitted; result order is not guaranteed "
        "to follow the request."
    ),
    responses={
        400: {
            "description": "Malformed or too many handles",
            "content": {
                "application/json": {
                    "example": {
                        "error": "INVALID_HANDLES",
                        "message": "1 invalid product handle(s)",
                        "details": [
                            {
                                "code": "INVALID_HANDLE",
                                "message": "bad handle!",
                                "field": "handles",
                            }
                        ],
                    }
                }
            },
        },
        502: {"description": "Shopify request failed"},
        504: {"description": "Shopify request timed out"},
    },
)
async def lookup_products(
    body: ProductLookupRequest,
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductLookupResponse:
    """Resolve handles to product summaries.

    Raises:
        BadRequestException: 400 if any handle is malformed or the list is too long.
        GatewayTimeoutException: 504 if Shopify timed out.
        BadGatewayException: 502 for any other Shopify failure.
    """
    try:
        products = await catalog_service.resolve_products(body.handles)
    except CatalogValidationError as e:
        logger.warning("Rejected product lookup", reason=str(e), invalid=e.invalid)
        details = [
            ErrorDetail(code="INVALID_HANDLE", message=str(handle), field="handles")
            for handle in e.invalid
        ]
        raise BadRequestException(
            str(e), details=details or None, error="INVALID_HANDLES"
        ) from e
    except UpstreamError as e:
        raise upstream_exception(e) from e

    return ProductLookupResponse(products=products)
