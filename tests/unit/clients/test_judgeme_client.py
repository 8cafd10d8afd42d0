"""Unit tests for JudgeMeClient.

Tests cover:
- Client lifecycle
- Request construction
- Page parsing and field dropping
- Error mapping to upstream exceptions
"""

from __future__ import annotations

import httpx
import pytest
import respx

from storefront_gateway.clients.exceptions import (
    UpstreamHTTPError,
    UpstreamShapeError,
    UpstreamTimeoutError,
)
from storefront_gateway.clients.judgeme import JudgeMeClient
from tests.fixtures.judgeme_responses import create_judgeme_page


pytestmark = pytest.mark.unit

BASE_URL = "https://judge.test/api/v1"
REVIEWS_URL = f"{BASE_URL}/reviews"


@pytest.fixture
async def client():
    """Initialized client with its own HTTP client."""
    judgeme = JudgeMeClient(
        api_token="secret-token",
        shop_domain="shop.myshopify.com",
        base_url=BASE_URL,
        timeout=1.0,
    )
    await judgeme.initialize()
    yield judgeme
    await judgeme.shutdown()


class TestJudgeMeClientLifecycle:
    """Tests for initialize/shutdown."""

    async def test_initialize_creates_http_client(self) -> None:
        """Should create an HTTP client on initialize."""
        judgeme = JudgeMeClient(api_token="t", shop_domain="s")

        await judgeme.initialize()

        assert judgeme._http is not None
        await judgeme.shutdown()
        assert judgeme._http is None

    async def test_injected_http_client_is_not_closed(self) -> None:
        """Should leave an injected HTTP client open on shutdown."""
        http_client = httpx.AsyncClient()
        judgeme = JudgeMeClient(api_token="t", shop_domain="s", http_client=http_client)

        await judgeme.initialize()
        await judgeme.shutdown()

        assert judgeme._http is http_client
        assert not http_client.is_closed
        await http_client.aclose()

    async def test_list_reviews_requires_initialize(self) -> None:
        """Should raise if used before initialize."""
        judgeme = JudgeMeClient(api_token="t", shop_domain="s")

        with pytest.raises(RuntimeError, match="not initialized"):
            await judgeme.list_reviews(page=1, per_page=100)

    def test_reviews_url_strips_trailing_slash(self) -> None:
        """Should build the reviews URL from the base URL."""
        judgeme = JudgeMeClient(api_token="t", shop_domain="s", base_url=f"{BASE_URL}/")

        assert judgeme.reviews_url == REVIEWS_URL


class TestListReviews:
    """Tests for list_reviews."""

    @respx.mock
    async def test_sends_credentials_and_paging_params(self, client) -> None:
        """Should pass token, shop domain and paging as query params."""
        route = respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json=create_judgeme_page(2))
        )

        await client.list_reviews(page=3, per_page=100)

        params = route.calls.last.request.url.params
        assert params["api_token"] == "secret-token"
        assert params["shop_domain"] == "shop.myshopify.com"
        assert params["per_page"] == "100"
        assert params["page"] == "3"
        assert route.calls.last.request.headers["accept"] == "application/json"

    @respx.mock
    async def test_parses_reviews_in_order(self, client) -> None:
        """Should return parsed reviews in upstream order."""
        respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json=create_judgeme_page(3, rating=4))
        )

        reviews = await client.list_reviews(page=1, per_page=100)

        assert [r.title for r in reviews] == ["Review 1", "Review 2", "Review 3"]
        assert all(r.rating == 4 for r in reviews)
        assert reviews[0].reviewer is not None
        assert reviews[0].reviewer.name == "Jane D."

    @respx.mock
    async def test_drops_undeclared_fields(self, client) -> None:
        """Should not keep reviewer email or IP address."""
        respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json=create_judgeme_page(1))
        )

        (review,) = await client.list_reviews(page=1, per_page=100)

        dumped = review.model_dump(by_alias=False)
        assert "ip_address" not in dumped
        assert "email" not in dumped["reviewer"]

    @respx.mock
    async def test_missing_reviews_key_is_empty_page(self, client) -> None:
        """Should treat a body without reviews as an empty page."""
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, json={}))

        assert await client.list_reviews(page=1, per_page=100) == []

    @respx.mock
    async def test_non_list_reviews_is_shape_error(self, client) -> None:
        """Should reject a reviews value that is not a list."""
        respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json={"reviews": {"id": 1}})
        )

        with pytest.raises(UpstreamShapeError):
            await client.list_reviews(page=1, per_page=100)

    @respx.mock
    @pytest.mark.parametrize("value", [{}, "", 0])
    async def test_falsy_non_list_reviews_is_shape_error(self, client, value) -> None:
        """Should reject an empty non-list reviews value instead of ending the listing."""
        respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json={"reviews": value})
        )

        with pytest.raises(UpstreamShapeError):
            await client.list_reviews(page=1, per_page=100)

    @respx.mock
    async def test_null_ratings_are_kept_in_the_page(self, client) -> None:
        """Should parse records with a null rating alongside valid ones."""
        page = create_judgeme_page(2)
        page["reviews"][1].update(rating=None, published=False)
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, json=page))

        reviews = await client.list_reviews(page=1, per_page=100)

        assert [r.rating for r in reviews] == [5, None]

    @respx.mock
    async def test_invalid_json_is_shape_error(self, client) -> None:
        """Should reject a body that is not JSON."""
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamShapeError):
            await client.list_reviews(page=1, per_page=100)

    @respx.mock
    async def test_non_numeric_rating_is_shape_error(self, client) -> None:
        """Should reject reviews whose rating is not a number."""
        respx.get(REVIEWS_URL).mock(
            return_value=httpx.Response(200, json={"reviews": [{"rating": "five"}]})
        )

        with pytest.raises(UpstreamShapeError):
            await client.list_reviews(page=1, per_page=100)

    @respx.mock
    async def test_http_error_status(self, client) -> None:
        """Should raise UpstreamHTTPError carrying the status code."""
        respx.get(REVIEWS_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(UpstreamHTTPError) as exc_info:
            await client.list_reviews(page=2, per_page=100)

        assert exc_info.value.status_code == 503
        assert exc_info.value.service == "judge.me"

    @respx.mock
    async def test_timeout(self, client) -> None:
        """Should raise UpstreamTimeoutError on timeout."""
        respx.get(REVIEWS_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(UpstreamTimeoutError):
            await client.list_reviews(page=1, per_page=100)

    @respx.mock
    async def test_connection_error(self, client) -> None:
        """Should raise UpstreamHTTPError without a status on connection failure."""
        respx.get(REVIEWS_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(UpstreamHTTPError) as exc_info:
            await client.list_reviews(page=1, per_page=100)

        assert exc_info.value.status_code is None
