"""Derived price, conversion and stock-display schemas."""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from storefront_gateway.schemas.base import APIResponse


class InventoryInfo(APIResponse):
    """Inventory state of the primary variant."""

    quantity: int = 0
    management_mode: str
    policy: str


class PricePerBaseUnit(APIResponse):
    """Prices normalised to the product's base unit (e.g. per sq.ft)."""

    current: Decimal
    compare: Decimal | None = None


class StockNotice(APIResponse):
    """Stock call-out rendered next to the price. Empty notice means none."""

    notice: str = ""
    subtext: str = ""
    color: str = ""
    emphasized: bool = False


class UnitDisplay(APIResponse):
    """Human label for the sell unit."""

    singular: str = ""
    plural: str = ""


class PriceInfo(APIResponse):
    """Everything the storefront needs to render a product's price block."""

    current_price: Decimal
    compare_at_price: Decimal | None = None
    on_sale: bool = False
    inventory: InventoryInfo
    uom: str | None = None
    sell_unit: str | None = None
    status: str | None = None
    product_type: str | None = None
    conversion_factor: Decimal = Field(default=Decimal(1))
    price_per_base_unit: PricePerBaseUnit | None = None
    stock_notice: StockNotice = Field(default_factory=StockNotice)
    unit_display: UnitDisplay = Field(default_factory=UnitDisplay)
