"""Exceptions for the catalog lookup service."""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for catalog service errors."""


class CatalogValidationError(CatalogError):
    """Raised when lookup input is malformed; no upstream call is made.

    ``invalid`` lists (a sample of) the offending handles, if any.
    """

    def __init__(self, message: str, invalid: list[object] | None = None) -> None:
        self.invalid = invalid or []
        super().__init__(message)
