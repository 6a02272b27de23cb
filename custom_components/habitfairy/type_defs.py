"""Type definitions for Habit Fairy data structures.

TypedDict is used for structures whose keys are fixed at design time (missions,
pet state, ledger entries, catalog records). Maps keyed by runtime values
(completed map by date, equipped items by category, preset overrides by mission
id) are plain ``dict`` aliases.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator, to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime normalisation of loaded data
lives in coordinator.py.
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

MissionId = str
ItemId = str
ISODate = str  # "2026-01-18"
ISODatetime = str  # "2026-01-18T12:30:00+00:00"

MissionCategory = Literal["morning", "daytime", "evening", "study", "health"]
PetType = Literal["fairy", "dino", "robot"]

CompletedMap = dict[ISODate, list[MissionId]]
EquippedItems = dict[str, ItemId]
PresetOverrides = dict[MissionId, dict[str, Any]]


# =============================================================================
# Missions
# =============================================================================


class MissionData(TypedDict):
    """A preset or custom mission."""

    id: MissionId
    name: str
    description: str
    icon: str
    category: MissionCategory
    timer_seconds: int  # 0 means no timer
    star_reward: int
    fairy_message_start: str
    fairy_message_complete: str
    is_preset: bool
    is_active: bool
    sort_order: int


class MissionsSlice(TypedDict):
    """Persisted missions slice."""

    custom_missions: list[MissionData]
    preset_overrides: PresetOverrides


# =============================================================================
# Pet
# =============================================================================


class PetStateData(TypedDict):
    """Per-user dynamic pet state."""

    type: PetType
    stage: int
    exp: int
    last_interaction: ISODatetime
    created_at: ISODatetime


class StageConfig(TypedDict):
    """Static definition of one growth stage."""

    name: Literal["egg", "baby", "adult"]
    display_name: str
    max_exp: int  # experience needed to leave this stage
    dialogues: list[str]
    asset: str


class PetConfig(TypedDict):
    """Static definition of a character type."""

    id: PetType
    display_name: str
    max_stage: int
    stages: dict[int, StageConfig]


class CharacterData(TypedDict):
    """A selectable profile character."""

    id: str
    name: str
    category: Literal["boy", "girl"]
    emoji: str
    description: str


# =============================================================================
# Economy
# =============================================================================


class AvatarItem(TypedDict):
    """A purchasable decoration item."""

    id: ItemId
    name: str
    emoji: str
    cost: int
    category: str


class LedgerEntry(TypedDict):
    """One star transaction."""

    timestamp: ISODatetime
    amount: int
    balance_after: int
    source: str
    reference_id: NotRequired[str | None]


class EconomySlice(TypedDict):
    """Persisted economy slice."""

    total_stars: int
    owned_items: list[ItemId]
    equipped_items: EquippedItems
    star_ledger: list[LedgerEntry]


# =============================================================================
# Profile
# =============================================================================


class ProfileSlice(TypedDict):
    """Persisted profile slice."""

    child_name: str | None
    selected_character: str


# =============================================================================
# Statistics
# =============================================================================


class DailyStats(TypedDict):
    """Completion statistics for one calendar day."""

    date: ISODate
    completed_count: int
    total_missions: int
    rate: int  # whole percent 0..100


class DashboardSummary(TypedDict):
    """Everything the dashboard shows in one read."""

    today_completed: int
    today_total: int
    today_rate: int
    weekly_stats: list[DailyStats]
    weekly_average_rate: int
    total_stars: int
    streak_days: int
