"""Unit tests for application startup and shutdown."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from storefront_gateway.core.events import lifespan
from storefront_gateway.services.catalog import CatalogService
from storefront_gateway.services.pricing import PricingService
from storefront_gateway.services.reviews import ReviewsService


pytestmark = pytest.mark.unit

MODULE = "storefront_gateway.core.events.lifespan"


def _mock_client(service_name: str) -> MagicMock:
    client = MagicMock()
    client.SERVICE_NAME = service_name
    client.initialize = AsyncMock()
    client.shutdown = AsyncMock()
    return client


@pytest.fixture
def clients() -> Iterator[tuple[MagicMock, MagicMock]]:
    judgeme = _mock_client("judgeme")
    shopify = _mock_client("shopify")
    with (
        patch(f"{MODULE}.setup_logging"),
        patch(f"{MODULE}.JudgeMeClient", return_value=judgeme) as judgeme_cls,
        patch(f"{MODULE}.ShopifyClient", return_value=shopify) as shopify_cls,
    ):
        judgeme.cls = judgeme_cls
        shopify.cls = shopify_cls
        yield judgeme, shopify


class TestLifespan:
    """Tests for the lifespan context manager."""

    async def test_startup_populates_state(self, test_settings, clients) -> None:
        """Should create clients and services and store them on app.state."""
        judgeme, shopify = clients
        app = FastAPI()
        app.state.settings = test_settings

        async with lifespan(app):
            assert app.state.judgeme_client is judgeme
            assert app.state.shopify_client is shopify
            assert isinstance(app.state.reviews_service, ReviewsService)
            assert isinstance(app.state.catalog_service, CatalogService)
            assert isinstance(app.state.pricing_service, PricingService)
            judgeme.initialize.assert_awaited_once()
            shopify.initialize.assert_awaited_once()

    async def test_clients_built_from_settings(self, test_settings, clients) -> None:
        """Should pass credentials and upstream settings to the clients."""
        judgeme, shopify = clients
        app = FastAPI()
        app.state.settings = test_settings

        async with lifespan(app):
            pass

        judgeme.cls.assert_called_once_with(
            api_token="test-judgeme-token",
            shop_domain=test_settings.reviews.shop_domain,
            base_url=test_settings.reviews.base_url,
            timeout=test_settings.reviews.timeout,
        )
        shopify.cls.assert_called_once_with(
            graphql_url=test_settings.shopify_graphql_url,
            access_token="test-shopify-token",
            timeout=test_settings.catalog.timeout,
        )

    async def test_shutdown_closes_clients(self, test_settings, clients) -> None:
        """Should close both clients on shutdown."""
        judgeme, shopify = clients
        app = FastAPI()
        app.state.settings = test_settings

        async with lifespan(app):
            judgeme.shutdown.assert_not_awaited()

        judgeme.shutdown.assert_awaited_once()
        shopify.shutdown.assert_awaited_once()

    async def test_starts_without_credentials(self, clients) -> None:
        """Should still start when no API tokens are configured."""
        from storefront_gateway.core.config import Settings

        app = FastAPI()
        app.state.settings = Settings(
            APP_ENV="test", JUDGEME_API_TOKEN="", SHOPIFY_ACCESS_TOKEN=""
        )

        async with lifespan(app):
            assert app.state.reviews_service is not None
            assert app.state.pricing_service is not None
