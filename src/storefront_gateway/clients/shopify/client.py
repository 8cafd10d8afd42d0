"""Shopify Admin GraphQL client.

Executes one GraphQL document per call against the shop's Admin API. Requests
carry a fixed timeout and are attempted once.
"""

from __future__ import annotations

from typing import Any, Final

import httpx
import orjson
from pydantic import ValidationError

from storefront_gateway.clients.exceptions import (
    UpstreamHTTPError,
    UpstreamQueryError,
    UpstreamShapeError,
    UpstreamTimeoutError,
)
from storefront_gateway.clients.shopify.models import ShopifyProduct, ShopifyProductsData
from storefront_gateway.observability.logging import get_logger


logger = get_logger(__name__)


class ShopifyClient:
    """HTTP client for the Shopify Admin GraphQL API."""

    SERVICE_NAME: Final[str] = "shopify"

    def __init__(
        self,
        graphql_url: str,
        access_token: str,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._graphql_url = graphql_url
        self._access_token = access_token
        self._timeout = timeout
        self._http = http_client
        self._owns_http_client = http_client is None

    @property
    def graphql_url(self) -> str:
        return self._graphql_url

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "X-Shopify-Access-Token": self._access_token,
                },
            )
        logger.info("ShopifyClient initialized", graphql_url=self._graphql_url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("ShopifyClient shutdown")

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        operation: str = "query",
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` object.

        Args:
            query: GraphQL document.
            variables: Variables for the document.
            operation: Short name used in logs and error messages.

        Raises:
            UpstreamTimeoutError: If the request exceeds the timeout.
            UpstreamHTTPError: On connection failures or non-2xx responses.
            UpstreamQueryError: If the response carries GraphQL ``errors``.
            UpstreamShapeError: If the body has no ``data`` object.
        """
        if self._http is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        payload = orjson.dumps({"query": query, "variables": variables or {}})

        try:
            response = await self._http.post(self._graphql_url, content=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Shopify request timed out", operation=operation)
            msg = f"{operation} timed out"
            raise UpstreamTimeoutError(self.SERVICE_NAME, msg) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Shopify returned error status",
                operation=operation,
                status_code=status_code,
            )
            msg = f"{operation} returned HTTP {status_code}"
            raise UpstreamHTTPError(self.SERVICE_NAME, msg, status_code) from e
        except httpx.RequestError as e:
            logger.warning(
                "Failed to connect to Shopify",
                operation=operation,
                error=str(e),
            )
            msg = f"{operation} request failed: {e}"
            raise UpstreamHTTPError(self.SERVICE_NAME, msg) from e

        return self._extract_data(response.content, operation)

    def _extract_data(self, content: bytes, operation: str) -> dict[str, Any]:
        try:
            body = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            msg = f"{operation} response is not valid JSON"
            raise UpstreamShapeError(self.SERVICE_NAME, msg) from e

        if not isinstance(body, dict):
            msg = f"{operation} response is not an object"
            raise UpstreamShapeError(self.SERVICE_NAME, msg)

        errors = body.get("errors")
        if errors:
            logger.warning(
                "Shopify query returned errors",
                operation=operation,
                errors=errors,
            )
            if not isinstance(errors, list):
                errors = [errors]
            raise UpstreamQueryError(
                self.SERVICE_NAME,
                [e if isinstance(e, dict) else {"message": str(e)} for e in errors],
            )

        data = body.get("data")
        if not isinstance(data, dict):
            msg = f"{operation} response has no data"
            raise UpstreamShapeError(self.SERVICE_NAME, msg)
        return data

    async def fetch_products(
        self,
        query: str,
        variables: dict[str, Any],
        *,
        operation: str,
    ) -> list[ShopifyProduct]:
        """Run a ``products(...)`` query and parse its nodes.

        Raises:
            UpstreamShapeError: If the nodes do not match the product shape.
            UpstreamError: Anything ``execute`` raises.
        """
        data = await self.execute(query, variables, operation=operation)
        try:
            payload = ShopifyProductsData.model_validate(data)
        except ValidationError as e:
            msg = f"{operation} returned malformed products: {e.error_count()} errors"
            raise UpstreamShapeError(self.SERVICE_NAME, msg) from e
        return payload.products.nodes
