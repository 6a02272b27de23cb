"""Economy Engine - Pure logic for star transactions, items and the star ledger.

This engine provides stateless, pure Python functions for:
- Sufficient funds validation before a purchase
- Balance arithmetic that never drops below zero
- Equip/unequip toggling of owned items
- Ledger entry creation and pruning
- The catalog of purchasable avatar items

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State management belongs in HabitFairyCoordinator.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import AvatarItem, EquippedItems, LedgerEntry


def _now_iso() -> str:
    """Return current UTC time as ISO string (engine-internal helper)."""
    return datetime.now(UTC).isoformat()


AVATAR_ITEMS: tuple[AvatarItem, ...] = (
    {"id": "hat-ribbon", "name": "Pink ribbon", "emoji": "🎀", "cost": 5, "category": const.ITEM_CATEGORY_HAT},
    {"id": "hat-wizard", "name": "Wizard hat", "emoji": "🎩", "cost": 10, "category": const.ITEM_CATEGORY_HAT},
    {"id": "hat-crown", "name": "Crown", "emoji": "👑", "cost": 20, "category": const.ITEM_CATEGORY_HAT},
    {"id": "hat-flower", "name": "Flower headband", "emoji": "🌸", "cost": 15, "category": const.ITEM_CATEGORY_HAT},
    {"id": "wing-butterfly", "name": "Butterfly wings", "emoji": "🦋", "cost": 30, "category": const.ITEM_CATEGORY_WING},
    {"id": "wing-angel", "name": "Angel wings", "emoji": "🕊️", "cost": 50, "category": const.ITEM_CATEGORY_WING},
    {"id": "bg-rainbow", "name": "Rainbow background", "emoji": "🌈", "cost": 25, "category": const.ITEM_CATEGORY_BACKGROUND},
    {"id": "bg-stars", "name": "Starlight background", "emoji": "🌌", "cost": 40, "category": const.ITEM_CATEGORY_BACKGROUND},
    {"id": "acc-wand", "name": "Magic wand", "emoji": "🪄", "cost": 35, "category": const.ITEM_CATEGORY_ACCESSORY},
    {"id": "acc-heart", "name": "Heart necklace", "emoji": "💖", "cost": 15, "category": const.ITEM_CATEGORY_ACCESSORY},
    {"id": "acc-star", "name": "Star glasses", "emoji": "🤩", "cost": 20, "category": const.ITEM_CATEGORY_ACCESSORY},
    {"id": "acc-unicorn", "name": "Unicorn horn", "emoji": "🦄", "cost": 100, "category": const.ITEM_CATEGORY_ACCESSORY},
)


class EconomyEngine:
    """Pure logic engine for star calculations and ledger operations.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.

    Transaction Sources (for ledger entries):
        - STARS_SOURCE_MISSION: Stars earned from completing a mission
        - STARS_SOURCE_PURCHASE: Stars spent on an item (negative delta)

    Reference IDs carry the mission_id or item_id involved.
    """

    @staticmethod
    def get_item_by_id(item_id: str | None) -> AvatarItem | None:
        """Return the catalog item with ``item_id`` or None."""
        return next((item for item in AVATAR_ITEMS if item["id"] == item_id), None)

    @staticmethod
    def validate_sufficient_funds(balance: int, cost: int) -> bool:
        """Check if balance is sufficient for a purchase.

        Args:
            balance: Current star balance
            cost: Price of the purchase (non-negative)

        Returns:
            True if balance >= cost, False otherwise
        """
        return balance >= cost

    @staticmethod
    def calculate_new_balance(current_balance: int, delta: int) -> int:
        """Calculate new balance after applying delta, floored at zero.

        Args:
            current_balance: Current star balance
            delta: Amount to add (positive) or subtract (negative)

        Returns:
            New balance after transaction
        """
        return max(current_balance + delta, const.DEFAULT_ZERO)

    @staticmethod
    def toggle_equipped(
        equipped_items: EquippedItems, item_id: str, category: str
    ) -> tuple[EquippedItems, bool]:
        """Equip ``item_id`` in ``category``, or unequip it if it is already there.

        Ownership is checked by the caller.

        Returns:
            A new equipped mapping and True if the item ended up equipped.
        """
        updated = dict(equipped_items)
        if updated.get(category) == item_id:
            del updated[category]
            return updated, False
        updated[category] = item_id
        return updated, True

    @staticmethod
    def create_ledger_entry(
        current_balance: int,
        delta: int,
        source: str,
        reference_id: str | None = None,
    ) -> LedgerEntry:
        """Create a ledger entry for a transaction.

        Args:
            current_balance: Balance BEFORE the transaction
            delta: Amount to add (positive) or subtract (negative)
            source: Transaction source (e.g., "mission", "purchase")
            reference_id: Optional ID of related entity (mission_id, item_id)

        Returns:
            LedgerEntry TypedDict with transaction details
        """
        return {
            const.DATA_LEDGER_TIMESTAMP: _now_iso(),
            const.DATA_LEDGER_AMOUNT: delta,
            const.DATA_LEDGER_BALANCE_AFTER: EconomyEngine.calculate_new_balance(
                current_balance, delta
            ),
            const.DATA_LEDGER_SOURCE: source,
            const.DATA_LEDGER_REFERENCE_ID: reference_id,
        }

    @staticmethod
    def prune_ledger(
        ledger: list[LedgerEntry],
        max_entries: int = const.DEFAULT_MAX_LEDGER_ENTRIES,
    ) -> list[LedgerEntry]:
        """Trim ledger to maximum entries, keeping most recent.

        Modifies the list in place and returns it for convenience.
        Newest entries are at the END of the list (append order).
        """
        if len(ledger) > max_entries:
            # Remove oldest entries (beginning of list)
            del ledger[: len(ledger) - max_entries]
        return ledger
