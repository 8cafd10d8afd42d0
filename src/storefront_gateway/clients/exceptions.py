"""Upstream client exceptions.

Every failure talking to Judge.me or Shopify is raised as an ``UpstreamError``
subclass carrying the upstream's name. The endpoint layer maps these onto 502 or
504 responses; the reviews path may instead fall back to its cached dataset.
"""

from __future__ import annotations

from typing import Any


class UpstreamError(Exception):
    """Base exception for upstream service failures."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service}: {message}")


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream request exceeds its timeout."""


class UpstreamHTTPError(UpstreamError):
    """Raised when an upstream request fails at the transport or HTTP level.

    ``status_code`` is None for connection failures.
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(service, message)


class UpstreamQueryError(UpstreamError):
    """Raised when a GraphQL response carries a top-level ``errors`` array."""

    def __init__(self, service: str, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        messages = "; ".join(str(e.get("message", e)) for e in errors) or "unknown"
        super().__init__(service, f"query failed: {messages}")


class UpstreamShapeError(UpstreamError):
    """Raised when an upstream response is missing expected fields."""


class PaginationLimitError(UpstreamError):
    """Raised when a paginated listing does not end within the page ceiling."""

    def __init__(self, service: str, max_pages: int) -> None:
        self.max_pages = max_pages
        super().__init__(service, f"listing did not end within {max_pages} pages")
