"""FastAPI dependencies for service access.

Services are created during application startup and stored in ``app.state``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from storefront_gateway.core.config import Settings, get_settings
from storefront_gateway.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from storefront_gateway.services.catalog.service import CatalogService
    from storefront_gateway.services.pricing.service import PricingService
    from storefront_gateway.services.reviews.service import ReviewsService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with, else the cached global ones."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


def _from_state(request: Request, name: str, label: str) -> object:
    service = getattr(request.app.state, name, None)
    if service is None:
        raise ServiceUnavailableException(f"{label} not available")
    return service


async def get_reviews_service(request: Request) -> ReviewsService:
    """Get the reviews service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    return _from_state(request, "reviews_service", "Reviews service")  # type: ignore[return-value]


async def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    return _from_state(request, "catalog_service", "Catalog service")  # type: ignore[return-value]


async def get_pricing_service(request: Request) -> PricingService:
    """Get the pricing service from app state.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    return _from_state(request, "pricing_service", "Pricing service")  # type: ignore[return-value]
