"""Unit tests for EconomyEngine - pure Python logic tests.

These tests verify the stateless star calculations without any Home Assistant
mocking. The EconomyEngine is a pure Python module with no HA dependencies.

Test Categories:
- Item catalog
- Sufficient funds validation
- Balance arithmetic
- Equip toggling
- Ledger entry creation and pruning
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from custom_components.habitfairy import const
from custom_components.habitfairy.engines.economy_engine import (
    AVATAR_ITEMS,
    EconomyEngine,
)

if TYPE_CHECKING:
    from custom_components.habitfairy.type_defs import LedgerEntry

# =============================================================================
# Test: Item catalog
# =============================================================================


class TestAvatarItems:
    """Tests for the purchasable item catalog."""

    def test_catalog_ids_unique_and_costs_positive(self) -> None:
        """Every item has a unique id and a positive cost."""
        assert len({item["id"] for item in AVATAR_ITEMS}) == len(AVATAR_ITEMS)
        assert all(item["cost"] > 0 for item in AVATAR_ITEMS)

    def test_get_item_by_id(self) -> None:
        """Known ids resolve; unknown ids give None."""
        crown = EconomyEngine.get_item_by_id("hat-crown")
        assert crown is not None
        assert crown["cost"] == 20
        assert crown["category"] == const.ITEM_CATEGORY_HAT
        assert EconomyEngine.get_item_by_id("hat-missing") is None


# =============================================================================
# Test: validate_sufficient_funds / calculate_new_balance
# =============================================================================


class TestBalance:
    """Tests for funds checks and balance arithmetic."""

    @pytest.mark.parametrize(
        ("balance", "cost", "expected"),
        [(10, 5, True), (10, 10, True), (10, 15, False), (0, 0, True)],
    )
    def test_sufficient_funds(self, balance, cost, expected) -> None:
        """Balance must cover the cost exactly or more."""
        assert EconomyEngine.validate_sufficient_funds(balance, cost) is expected

    def test_new_balance_adds_and_subtracts(self) -> None:
        """Positive deltas add, negative deltas subtract."""
        assert EconomyEngine.calculate_new_balance(10, 5) == 15
        assert EconomyEngine.calculate_new_balance(10, -4) == 6

    def test_new_balance_never_negative(self) -> None:
        """Balance is floored at zero."""
        assert EconomyEngine.calculate_new_balance(3, -10) == 0


# =============================================================================
# Test: toggle_equipped
# =============================================================================


class TestToggleEquipped:
    """Tests for equip/unequip toggling."""

    def test_equip_into_empty_slot(self) -> None:
        """An empty category gets the item."""
        equipped, is_equipped = EconomyEngine.toggle_equipped({}, "hat-crown", "hat")
        assert equipped == {"hat": "hat-crown"}
        assert is_equipped is True

    def test_equip_replaces_other_item(self) -> None:
        """Equipping in an occupied category replaces the previous item."""
        equipped, is_equipped = EconomyEngine.toggle_equipped(
            {"hat": "hat-ribbon", "wing": "wing-angel"}, "hat-crown", "hat"
        )
        assert equipped == {"hat": "hat-crown", "wing": "wing-angel"}
        assert is_equipped is True

    def test_toggle_same_item_unequips(self) -> None:
        """Toggling the equipped item clears the category."""
        original = {"hat": "hat-crown"}
        equipped, is_equipped = EconomyEngine.toggle_equipped(
            original, "hat-crown", "hat"
        )
        assert equipped == {}
        assert is_equipped is False
        assert original == {"hat": "hat-crown"}


# =============================================================================
# Test: create_ledger_entry / prune_ledger
# =============================================================================


class TestLedger:
    """Tests for ledger entries."""

    def test_earn_entry(self) -> None:
        """Entry captures delta, balance after, source and reference."""
        entry = EconomyEngine.create_ledger_entry(
            10, 5, const.STARS_SOURCE_MISSION, "mission-eat"
        )
        assert entry[const.DATA_LEDGER_AMOUNT] == 5
        assert entry[const.DATA_LEDGER_BALANCE_AFTER] == 15
        assert entry[const.DATA_LEDGER_SOURCE] == const.STARS_SOURCE_MISSION
        assert entry[const.DATA_LEDGER_REFERENCE_ID] == "mission-eat"
        assert entry[const.DATA_LEDGER_TIMESTAMP]

    def test_spend_entry(self) -> None:
        """A purchase is a negative delta."""
        entry = EconomyEngine.create_ledger_entry(
            15, -10, const.STARS_SOURCE_PURCHASE, "hat-wizard"
        )
        assert entry[const.DATA_LEDGER_AMOUNT] == -10
        assert entry[const.DATA_LEDGER_BALANCE_AFTER] == 5

    def test_prune_keeps_newest(self) -> None:
        """Pruning drops the oldest entries in place."""
        ledger: list[LedgerEntry] = [
            EconomyEngine.create_ledger_entry(i, 1, const.STARS_SOURCE_MISSION)
            for i in range(60)
        ]
        result = EconomyEngine.prune_ledger(ledger)

        assert result is ledger
        assert len(ledger) == const.DEFAULT_MAX_LEDGER_ENTRIES
        assert ledger[0][const.DATA_LEDGER_BALANCE_AFTER] == 11
        assert ledger[-1][const.DATA_LEDGER_BALANCE_AFTER] == 60

    def test_prune_short_ledger_untouched(self) -> None:
        """Ledgers under the limit are left alone."""
        ledger: list[LedgerEntry] = [
            EconomyEngine.create_ledger_entry(0, 1, const.STARS_SOURCE_MISSION)
        ]
        EconomyEngine.prune_ledger(ledger, max_entries=5)
        assert len(ledger) == 1
