"""Judge.me reviews API client.

Fetches one page of reviews per call. Each request has its own timeout and is
attempted exactly once; pagination and caching are handled by the reviews
service.
"""

from __future__ import annotations

from typing import Final

import httpx
import orjson
from pydantic import ValidationError

from storefront_gateway.clients.exceptions import (
    UpstreamHTTPError,
    UpstreamShapeError,
    UpstreamTimeoutError,
)
from storefront_gateway.clients.judgeme.models import JudgeMeReview
from storefront_gateway.observability.logging import get_logger


logger = get_logger(__name__)

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


class JudgeMeClient:
    """Client for the Judge.me public reviews API.

    Example:
        ```python
        client = JudgeMeClient(api_token="...", shop_domain="shop.myshopify.com")
        await client.initialize()
        reviews = await client.list_reviews(page=1, per_page=100)
        await client.shutdown()
        ```
    """

    SERVICE_NAME: Final[str] = "judge.me"

    def __init__(
        self,
        api_token: str,
        shop_domain: str,
        base_url: str = "https://judge.me/api/v1",
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_token = api_token
        self._shop_domain = shop_domain
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http_client
        self._owns_http_client = http_client is None

    @property
    def reviews_url(self) -> str:
        return f"{self._base_url}/reviews"

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=DEFAULT_HEADERS,
            )
        logger.info(
            "JudgeMeClient initialized",
            shop_domain=self._shop_domain,
            timeout=self._timeout,
        )

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("JudgeMeClient shutdown")

    async def list_reviews(self, page: int, per_page: int) -> list[JudgeMeReview]:
        """Fetch a single page of reviews.

        Args:
            page: 1-based page number.
            per_page: Page size requested from the upstream.

        Returns:
            The reviews on that page, in upstream order. A body without a
            ``reviews`` key is treated as an empty page.

        Raises:
            UpstreamTimeoutError: If the request exceeds the timeout.
            UpstreamHTTPError: On connection failures or non-2xx responses.
            UpstreamShapeError: If the body is not the expected JSON shape.
        """
        if self._http is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        params = {
            "api_token": self._api_token,
            "shop_domain": self._shop_domain,
            "per_page": per_page,
            "page": page,
        }

        try:
            response = await self._http.get(self.reviews_url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Judge.me request timed out", page=page)
            msg = f"page {page} timed out"
            raise UpstreamTimeoutError(self.SERVICE_NAME, msg) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Judge.me returned error status",
                page=page,
                status_code=status_code,
            )
            msg = f"page {page} returned HTTP {status_code}"
            raise UpstreamHTTPError(self.SERVICE_NAME, msg, status_code) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to Judge.me", page=page, error=str(e))
            msg = f"page {page} request failed: {e}"
            raise UpstreamHTTPError(self.SERVICE_NAME, msg) from e

        return self._parse_page(response.content, page)

    def _parse_page(self, content: bytes, page: int) -> list[JudgeMeReview]:
        try:
            body = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            msg = f"page {page} is not valid JSON"
            raise UpstreamShapeError(self.SERVICE_NAME, msg) from e

        if not isinstance(body, dict):
            msg = f"page {page} body is not an object"
            raise UpstreamShapeError(self.SERVICE_NAME, msg)

        raw_reviews = body.get("reviews", [])
        if not isinstance(raw_reviews, list):
            msg = f"page {page} 'reviews' is not a list"
            raise UpstreamShapeError(self.SERVICE_NAME, msg)

        try:
            return [JudgeMeReview.model_validate(item) for item in raw_reviews]
        except ValidationError as e:
            msg = f"page {page} contains malformed reviews: {e.error_count()} errors"
            raise UpstreamShapeError(self.SERVICE_NAME, msg) from e
