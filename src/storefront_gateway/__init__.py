"""Storefront gateway: cached, normalised access to the catalog and reviews APIs."""

__version__ = "0.1.0"
