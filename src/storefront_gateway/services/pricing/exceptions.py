"""Exceptions for the pricing service."""

from __future__ import annotations


class PricingError(Exception):
    """Base exception for pricing service errors."""


class PriceNotFoundError(PricingError):
    """Raised when there is nothing to price for a handle."""

    def __init__(self, handle: str, message: str) -> None:
        self.handle = handle
        super().__init__(message)


class ProductNotFoundError(PriceNotFoundError):
    """Raised when no product has the requested handle."""

    def __init__(self, handle: str) -> None:
        super().__init__(handle, f"Product '{handle}' not found")


class VariantNotFoundError(PriceNotFoundError):
    """Raised when the product exists but has no primary variant."""

    def __init__(self, handle: str) -> None:
        super().__init__(handle, f"Product '{handle}' has no variants")
