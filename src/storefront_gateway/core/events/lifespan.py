"""Application lifespan event handlers.

Startup configures logging, creates the upstream clients and the services
built on them, and stores everything on ``app.state``. Shutdown closes the
clients' HTTP connections.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from storefront_gateway.clients.judgeme import JudgeMeClient
from storefront_gateway.clients.shopify import ShopifyClient
from storefront_gateway.core.config import Settings, get_settings
from storefront_gateway.observability.logging import get_logger, setup_logging
from storefront_gateway.services.catalog import CatalogService
from storefront_gateway.services.pricing import PricingService
from storefront_gateway.services.reviews import ReviewsService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize clients and services.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    await _init_reviews(app, settings)
    await _init_catalog(app, settings)

    logger.info("Application startup complete")


async def _init_reviews(app: FastAPI, settings: Settings) -> None:
    """Create the Judge.me client and the cached reviews service."""
    if not settings.JUDGEME_API_TOKEN:
        logger.warning("JUDGEME_API_TOKEN not set - Judge.me requests will be rejected")

    client = JudgeMeClient(
        api_token=settings.JUDGEME_API_TOKEN,
        shop_domain=settings.reviews.shop_domain,
        base_url=settings.reviews.base_url,
        timeout=settings.reviews.timeout,
    )
    await client.initialize()
    app.state.judgeme_client = client

    app.state.reviews_service = ReviewsService(
        client,
        page_size=settings.reviews.page_size,
        max_pages=settings.reviews.max_pages,
        cache_ttl=settings.reviews.cache_ttl,
        min_rating=settings.reviews.min_rating,
    )
    logger.info(
        "ReviewsService initialized",
        cache_ttl=settings.reviews.cache_ttl,
        page_size=settings.reviews.page_size,
    )


async def _init_catalog(app: FastAPI, settings: Settings) -> None:
    """Create the Shopify client and the catalog and pricing services."""
    if not settings.SHOPIFY_ACCESS_TOKEN:
        logger.warning("SHOPIFY_ACCESS_TOKEN not set - Shopify requests will be rejected")

    client = ShopifyClient(
        graphql_url=settings.shopify_graphql_url,
        access_token=settings.SHOPIFY_ACCESS_TOKEN,
        timeout=settings.catalog.timeout,
    )
    await client.initialize()
    app.state.shopify_client = client

    app.state.catalog_service = CatalogService(
        client,
        chunk_size=settings.catalog.chunk_size,
        max_handles=settings.catalog.max_handles,
        metafield_namespace=settings.catalog.metafield_namespace,
        parent_product_metafield=settings.catalog.parent_product_metafield,
    )
    app.state.pricing_service = PricingService(
        client,
        metafield_namespace=settings.catalog.metafield_namespace,
    )
    logger.info(
        "Catalog services initialized",
        chunk_size=settings.catalog.chunk_size,
        max_handles=settings.catalog.max_handles,
    )


async def _shutdown(app: FastAPI) -> None:
    """Close upstream clients.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    for name in ("judgeme_client", "shopify_client"):
        client = getattr(app.state, name, None)
        if client is not None:
            await client.shutdown()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Settings stored on ``app.state`` by the factory take precedence over the
    cached global settings.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
