"""Price derivation rules.

Pure functions turning one catalog record (product, primary variant and
metafields) into the storefront's price block. Nothing here performs I/O or
keeps state, so the engine is safe to call from any number of requests at once.

Pipeline:
1. conversion factor from the (uom, sell unit) table
2. price per base unit, skipped for trim products
3. stock notice from the lifecycle/inventory decision table
4. sell-unit display label
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from storefront_gateway.schemas.enums import (
    InventoryManagement,
    InventoryPolicy,
    LifecycleStatus,
    SellUnit,
    StockLevel,
    UnitOfMeasure,
)
from storefront_gateway.schemas.pricing import (
    InventoryInfo,
    PriceInfo,
    PricePerBaseUnit,
    StockNotice,
    UnitDisplay,
)
from storefront_gateway.services.pricing.constants import (
    CENTS,
    CONVERSION_TABLE,
    IDENTITY_FACTOR,
    SELL_UNIT_KEY,
    STATUS_KEY,
    STOCK_RULES,
    TRIM_PRODUCT_TYPE,
    UNIT_LABELS,
    UOM_KEY,
)
from storefront_gateway.services.pricing.exceptions import VariantNotFoundError


if TYPE_CHECKING:
    from collections.abc import Mapping

    from storefront_gateway.clients.shopify.models import ShopifyProduct


def parse_decimal(raw: str | None) -> Decimal | None:
    """Parse a numeric metafield value; None for missing or non-numeric input."""
    if raw is None:
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def conversion_factor(
    uom: UnitOfMeasure | None,
    sell_unit: SellUnit | None,
    params: Mapping[str, str],
) -> Decimal:
    """Look up the sell-unit to base-unit multiplier.

    Unlisted pairs (including unknown codes) use 1. A listed pair whose
    parameter metafield is missing or not numeric yields 0.
    """
    if uom is None or sell_unit is None or (uom, sell_unit) not in CONVERSION_TABLE:
        return IDENTITY_FACTOR

    param = CONVERSION_TABLE[(uom, sell_unit)]
    if param is None:
        return IDENTITY_FACTOR

    value = parse_decimal(params.get(param.value))
    return value if value is not None else Decimal(0)


def _per_unit(price: Decimal, factor: Decimal) -> Decimal:
    if factor <= 0:
        return price
    return (price / factor).quantize(CENTS, rounding=ROUND_HALF_UP)


def is_trim(product_type: str | None) -> bool:
    return product_type is not None and product_type.strip().lower() == TRIM_PRODUCT_TYPE


def price_per_base_unit(
    price: Decimal,
    compare_at_price: Decimal | None,
    factor: Decimal,
    product_type: str | None,
) -> PricePerBaseUnit | None:
    """Normalise prices to the base unit; None for trim products."""
    if is_trim(product_type):
        return None
    return PricePerBaseUnit(
        current=_per_unit(price, factor),
        compare=_per_unit(compare_at_price, factor) if compare_at_price is not None else None,
    )


def classify_stock(
    status: LifecycleStatus | None,
    management: InventoryManagement,
    policy: InventoryPolicy | None,
    quantity: int,
) -> StockNotice:
    """Pick the stock call-out for a variant; empty when no rule applies."""
    if status is None or policy is None:
        return StockNotice()

    rule = STOCK_RULES.get((status, management, policy, StockLevel.from_quantity(quantity)))
    if rule is None:
        return StockNotice()

    return StockNotice(
        notice=rule.notice,
        subtext=rule.subtext.format(qty=quantity),
        color=rule.color.value,
        emphasized=rule.emphasized,
    )


def unit_display(sell_unit: SellUnit | None) -> UnitDisplay:
    if sell_unit is None:
        return UnitDisplay()
    singular, plural = UNIT_LABELS[sell_unit]
    return UnitDisplay(singular=singular, plural=plural)


def _code(parsed: str | None, raw: str | None) -> str | None:
    if parsed is not None:
        return str(parsed)
    return raw.strip() if raw else None


class PriceDerivationEngine:
    """Derives ``PriceInfo`` from a catalog record.

    Args:
        metafield_namespace: Namespace holding the uom, sell-unit, status and
            conversion metafields.
    """

    def __init__(self, metafield_namespace: str = "custom") -> None:
        self._namespace = metafield_namespace

    def derive(self, product: ShopifyProduct) -> PriceInfo:
        """Build the price block for ``product``'s primary variant.

        Raises:
            VariantNotFoundError: If the product has no variants.
        """
        if not product.variants.nodes:
            raise VariantNotFoundError(product.handle)
        variant = product.variants.nodes[0]

        params = product.metafield_values(self._namespace)
        raw_uom = params.get(UOM_KEY)
        raw_sell_unit = params.get(SELL_UNIT_KEY)
        raw_status = params.get(STATUS_KEY) or product.status

        uom = UnitOfMeasure.parse(raw_uom)
        sell_unit = SellUnit.parse(raw_sell_unit)
        status = LifecycleStatus.parse(raw_status)
        policy = InventoryPolicy.parse(variant.inventory_policy)
        management = InventoryManagement.from_tracked(
            variant.inventory_item is not None and variant.inventory_item.tracked
        )
        quantity = variant.inventory_quantity or 0

        factor = conversion_factor(uom, sell_unit, params)
        compare_at = variant.compare_at_price

        return PriceInfo(
            current_price=variant.price,
            compare_at_price=compare_at,
            on_sale=compare_at is not None and compare_at > variant.price,
            inventory=InventoryInfo(
                quantity=quantity,
                management_mode=management.value,
                policy=_code(policy, variant.inventory_policy.lower()) or "",
            ),
            uom=_code(uom, raw_uom),
            sell_unit=_code(sell_unit, raw_sell_unit),
            status=_code(status, raw_status.lower() if raw_status else None),
            product_type=product.product_type,
            conversion_factor=factor,
            price_per_base_unit=price_per_base_unit(
                variant.price, compare_at, factor, product.product_type
            ),
            stock_notice=classify_stock(status, management, policy, quantity),
            unit_display=unit_display(sell_unit),
        )
