"""Engine modules for Habit Fairy integration.

Contains specialized computation engines:
- mission_engine: Preset catalog, categories, grouping and list maintenance
- pet_engine: Growth stages, evolution rules and the character catalog
- economy_engine: Star balance, item catalog, equip toggling and ledger
- statistics_engine: Streaks and completion statistics
"""

# Use relative imports within package to avoid mypy module resolution issues
from .economy_engine import AVATAR_ITEMS, EconomyEngine
from .mission_engine import (
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    PRESET_MISSIONS,
    MissionEngine,
)
from .pet_engine import (
    CHARACTERS,
    PET_REGISTRY,
    InvalidPetStageError,
    InvalidPetTypeError,
    PetEngine,
    PetGrowthEffect,
)
from .statistics_engine import StatisticsEngine

__all__ = [
    "AVATAR_ITEMS",
    "CATEGORY_LABELS",
    "CATEGORY_ORDER",
    "CHARACTERS",
    "PET_REGISTRY",
    "PRESET_MISSIONS",
    "EconomyEngine",
    "InvalidPetStageError",
    "InvalidPetTypeError",
    "MissionEngine",
    "PetEngine",
    "PetGrowthEffect",
    "StatisticsEngine",
]
