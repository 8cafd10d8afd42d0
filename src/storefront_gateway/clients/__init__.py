"""HTTP clients for the upstream commerce services."""

from storefront_gateway.clients.exceptions import (
    PaginationLimitError,
    UpstreamError,
    UpstreamHTTPError,
    UpstreamQueryError,
    UpstreamShapeError,
    UpstreamTimeoutError,
)


__all__ = [
    "PaginationLimitError",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamQueryError",
    "UpstreamShapeError",
    "UpstreamTimeoutError",
]
