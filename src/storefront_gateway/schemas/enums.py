"""Enumerations keying the catalog derivation tables.

Metafield and variant values arrive as free-form strings; ``parse`` maps them
onto these members and returns None for anything unrecognised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class _ParsedEnum(StrEnum):
    @classmethod
    def _normalize(cls, raw: str) -> str:
        return raw.strip().lower()

    @classmethod
    def parse(cls, raw: str | None) -> Self | None:
        if raw is None:
            return None
        try:
            return cls(cls._normalize(raw))
        except ValueError:
            return None


class _UnitCode(_ParsedEnum):
    @classmethod
    def _normalize(cls, raw: str) -> str:
        return raw.strip().upper()


class UnitOfMeasure(_UnitCode):
    """How a product is physically measured."""

    SQUARE_FOOT = "SF"
    EACH = "EA"
    BOX = "BX"


class SellUnit(_UnitCode):
    """The unit a customer purchases in."""

    BOX = "BX"
    SQUARE_FOOT = "SF"
    EACH = "EA"
    PIECE = "PC"
    SHEET = "SH"
    SET = "ST"
    PALLET = "PL"


class ConversionParam(StrEnum):
    """Numeric metafields used as conversion-table parameters."""

    SF_PER_EACH = "sf_per_each"
    SF_PER_BOX = "sf_per_box"
    SF_PER_PALLET = "sf_per_pallet"
    BOXES_PER_PALLET = "boxes_per_pallet"


class LifecycleStatus(_ParsedEnum):
    """Merchandising lifecycle of a product."""

    ACTIVE = "active"
    DISCONTINUED = "discontinued"
    CLEARANCE = "clearance"
    DRAFT = "draft"
    ARCHIVED = "archived"


class InventoryManagement(StrEnum):
    """Whether the catalog tracks stock counts for a variant."""

    SHOPIFY = "shopify"
    UNMANAGED = "unmanaged"

    @classmethod
    def from_tracked(cls, tracked: bool) -> InventoryManagement:
        return cls.SHOPIFY if tracked else cls.UNMANAGED


class InventoryPolicy(_ParsedEnum):
    """Whether sales continue past zero stock."""

    CONTINUE = "continue"
    DENY = "deny"


class StockLevel(StrEnum):
    """Quantity bucket used by the stock notice table."""

    OUT = "out"
    AVAILABLE = "available"

    @classmethod
    def from_quantity(cls, quantity: int) -> StockLevel:
        # Oversold variants report negative quantities
        return cls.AVAILABLE if quantity > 0 else cls.OUT


class NoticeColor(StrEnum):
    """Call-out colours rendered by the storefront theme."""

    WARNING = "#FD8B07"
    DANGER = "#DC3545"
