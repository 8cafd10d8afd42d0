"""Custom middleware components."""

from storefront_gateway.core.middleware.logging import LoggingMiddleware
from storefront_gateway.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
