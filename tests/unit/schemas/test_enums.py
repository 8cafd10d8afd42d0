"""Unit tests for code-parsing enumerations."""

from __future__ import annotations

import pytest

from storefront_gateway.schemas.enums import (
    InventoryManagement,
    InventoryPolicy,
    LifecycleStatus,
    SellUnit,
    StockLevel,
    UnitOfMeasure,
)


pytestmark = pytest.mark.unit


class TestParse:
    """Tests for the parse classmethods."""

    def test_unit_codes_are_case_insensitive(self) -> None:
        """Should accept unit codes in any case with surrounding spaces."""
        assert UnitOfMeasure.parse(" sf ") is UnitOfMeasure.SQUARE_FOOT
        assert SellUnit.parse("bx") is SellUnit.BOX

    def test_lowercase_codes(self) -> None:
        """Should normalise status and policy codes to lower case."""
        assert LifecycleStatus.parse("CLEARANCE") is LifecycleStatus.CLEARANCE
        assert InventoryPolicy.parse("CONTINUE") is InventoryPolicy.CONTINUE

    @pytest.mark.parametrize("raw", [None, "", "unknown"])
    def test_unknown_values(self, raw: str | None) -> None:
        """Should return None for unrecognised values."""
        assert SellUnit.parse(raw) is None
        assert LifecycleStatus.parse(raw) is None


class TestDerivedEnums:
    """Tests for enums built from raw variant fields."""

    def test_inventory_management_from_tracked(self) -> None:
        """Should map tracked inventory to shopify management."""
        assert InventoryManagement.from_tracked(True) is InventoryManagement.SHOPIFY
        assert InventoryManagement.from_tracked(False) is InventoryManagement.UNMANAGED

    @pytest.mark.parametrize(
        ("quantity", "expected"),
        [(-2, StockLevel.OUT), (0, StockLevel.OUT), (1, StockLevel.AVAILABLE)],
    )
    def test_stock_level_from_quantity(self, quantity: int, expected: StockLevel) -> None:
        """Should treat zero and negative quantities as out of stock."""
        assert StockLevel.from_quantity(quantity) is expected
