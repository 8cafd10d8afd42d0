"""Rule tables for price derivation.

Every table is keyed by enum members so a missing combination is a lookup miss
rather than a typo in a string comparison. Unit tests assert which tables must
cover their whole key space.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Final

from storefront_gateway.schemas.enums import (
    ConversionParam,
    InventoryManagement,
    InventoryPolicy,
    LifecycleStatus,
    NoticeColor,
    SellUnit,
    StockLevel,
    UnitOfMeasure,
)


# =============================================================================
# Metafield keys (within the configured namespace)
# =============================================================================

UOM_KEY: Final[str] = "uom"
SELL_UNIT_KEY: Final[str] = "sell_unit"
STATUS_KEY: Final[str] = "product_status"

# Products of this type are sold by the piece and never area-normalised
TRIM_PRODUCT_TYPE: Final[str] = "trim"

CENTS: Final[Decimal] = Decimal("0.01")
IDENTITY_FACTOR: Final[Decimal] = Decimal(1)


# =============================================================================
# Conversion factors
# =============================================================================
# (uom, sell unit) -> metafield holding the factor; None means factor 1.
# Pairs not listed also use factor 1.

CONVERSION_TABLE: Final = MappingProxyType(
    {
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.SQUARE_FOOT): None,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.BOX): ConversionParam.SF_PER_BOX,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.PALLET): ConversionParam.SF_PER_PALLET,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.EACH): ConversionParam.SF_PER_EACH,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.PIECE): ConversionParam.SF_PER_EACH,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.SHEET): ConversionParam.SF_PER_EACH,
        (UnitOfMeasure.SQUARE_FOOT, SellUnit.SET): ConversionParam.SF_PER_EACH,
        (UnitOfMeasure.BOX, SellUnit.PALLET): ConversionParam.BOXES_PER_PALLET,
    }
)


# =============================================================================
# Unit labels
# =============================================================================

UNIT_LABELS: Final = MappingProxyType(
    {
        SellUnit.BOX: ("box", "boxes"),
        SellUnit.SQUARE_FOOT: ("sq.ft", "sq.ft"),
        SellUnit.EACH: ("piece", "pieces"),
        SellUnit.PIECE: ("piece", "pieces"),
        SellUnit.SHEET: ("sheet", "sheets"),
        SellUnit.SET: ("set", "sets"),
        SellUnit.PALLET: ("pallet", "pallets"),
    }
)


# =============================================================================
# Stock notices
# =============================================================================


@dataclass(frozen=True, slots=True)
class StockRule:
    """Call-out template; ``{qty}`` in the subtext is replaced by the quantity."""

    notice: str
    subtext: str
    color: NoticeColor
    emphasized: bool = False


StockKey = tuple[LifecycleStatus, InventoryManagement, InventoryPolicy, StockLevel]

ONLY_N_LEFT: Final[str] = "Only {qty} left!"
OUT_OF_STOCK: Final[str] = "Out of Stock"

# Combinations not listed render no call-out
STOCK_RULES: Final = MappingProxyType(
    {
        (
            LifecycleStatus.ACTIVE,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.CONTINUE,
            StockLevel.OUT,
        ): StockRule("Temporarily", "Oversold", NoticeColor.WARNING, emphasized=True),
        (
            LifecycleStatus.ACTIVE,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.CONTINUE,
            StockLevel.AVAILABLE,
        ): StockRule("Low Stock", ONLY_N_LEFT, NoticeColor.WARNING),
        (
            LifecycleStatus.DISCONTINUED,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.DENY,
            StockLevel.OUT,
        ): StockRule("Discontinued", OUT_OF_STOCK, NoticeColor.DANGER),
        (
            LifecycleStatus.DISCONTINUED,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.DENY,
            StockLevel.AVAILABLE,
        ): StockRule("Discontinued", ONLY_N_LEFT, NoticeColor.WARNING),
        (
            LifecycleStatus.CLEARANCE,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.DENY,
            StockLevel.AVAILABLE,
        ): StockRule("", ONLY_N_LEFT, NoticeColor.WARNING),
        (
            LifecycleStatus.CLEARANCE,
            InventoryManagement.SHOPIFY,
            InventoryPolicy.DENY,
            StockLevel.OUT,
        ): StockRule("", OUT_OF_STOCK, NoticeColor.DANGER),
    }
)
