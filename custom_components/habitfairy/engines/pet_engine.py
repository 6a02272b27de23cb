"""Pet Engine - Growth stage catalog and evolution rules.

This engine provides stateless, pure Python functions for:
- Per-type stage definitions (names, assets, dialogue pools, exp thresholds)
- Evolution checks and exp application with a single carry-over policy
- The selectable profile character catalog

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State management belongs in HabitFairyCoordinator.

Evolution policy:
    One evaluation advances at most one stage. When a pet evolves, the exp
    above the stage threshold carries over into the new stage
    (``exp = exp - max_exp``). At the final stage exp keeps accumulating and
    never triggers evolution.
"""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import CharacterData, PetConfig, PetStateData, StageConfig

# Threshold used for the final stage, which can never be left
FINAL_STAGE_MAX_EXP = 999999


class InvalidPetTypeError(ValueError):
    """Raised when a pet type is not in the catalog.

    Attributes:
        pet_type: The unknown type that was requested
    """

    def __init__(self, pet_type: object) -> None:
        """Initialize InvalidPetTypeError."""
        self.pet_type = pet_type
        super().__init__(
            f"Unknown pet type {pet_type!r}; expected one of {list(PET_REGISTRY)}"
        )


class InvalidPetStageError(ValueError):
    """Raised when a stage is outside ``1..max_stage`` for a pet type.

    Attributes:
        pet_type: The pet type
        stage: The out-of-range stage
        max_stage: Highest valid stage for the type
    """

    def __init__(self, pet_type: str, stage: object, max_stage: int) -> None:
        """Initialize InvalidPetStageError."""
        self.pet_type = pet_type
        self.stage = stage
        self.max_stage = max_stage
        super().__init__(
            f"Invalid stage {stage!r} for pet type '{pet_type}': "
            f"expected 1..{max_stage}"
        )


@dataclass
class PetGrowthEffect:
    """Result of applying experience to a pet.

    Attributes:
        stage: Stage after the update
        exp: Experience after the update (surplus already carried over)
        evolved: True when this update advanced the stage
        previous_stage: Stage before the update
    """

    stage: int
    exp: int
    evolved: bool
    previous_stage: int


def _stage(
    name: str, display_name: str, max_exp: int, dialogues: list[str], asset: str
) -> StageConfig:
    return {
        "name": name,  # type: ignore[typeddict-item]
        "display_name": display_name,
        "max_exp": max_exp,
        "dialogues": dialogues,
        "asset": asset,
    }


PET_REGISTRY: dict[str, PetConfig] = {
    const.PET_TYPE_FAIRY: {
        "id": const.PET_TYPE_FAIRY,
        "display_name": "Fairy",
        "max_stage": 3,
        "stages": {
            1: _stage(
                const.PET_STAGE_EGG,
                "Mysterious egg",
                50,
                [
                    "Keep me warm...",
                    "Just a little more...",
                    "I think something is moving!",
                ],
                "pets/fairy/egg.png",
            ),
            2: _stage(
                const.PET_STAGE_BABY,
                "Baby Starry",
                150,
                [
                    "Hi! I'm Starry!",
                    "Let's do our best today!",
                    "Finishing missions makes me happy!",
                    "Let's play together!",
                ],
                "pets/fairy/baby.png",
            ),
            3: _stage(
                const.PET_STAGE_ADULT,
                "Fairy Starry",
                FINAL_STAGE_MAX_EXP,
                [
                    "What a wonderful day!",
                    "You are amazing!",
                    "I'm so happy we're together!",
                    "You're my best friend!",
                    "You can do anything!",
                ],
                "pets/fairy/adult.png",
            ),
        },
    },
    const.PET_TYPE_DINO: {
        "id": const.PET_TYPE_DINO,
        "display_name": "Dino",
        "max_stage": 3,
        "stages": {
            1: _stage(
                const.PET_STAGE_EGG,
                "Dino egg",
                50,
                ["Wiggle wiggle...", "So warm!"],
                "pets/dino/egg.png",
            ),
            2: _stage(
                const.PET_STAGE_BABY,
                "Baby Dino",
                150,
                ["Rawr!", "I'm hungry!", "Let's play!"],
                "pets/dino/baby.png",
            ),
            3: _stage(
                const.PET_STAGE_ADULT,
                "Mighty Dino",
                FINAL_STAGE_MAX_EXP,
                ["ROAR! The best!", "I got so strong!"],
                "pets/dino/adult.png",
            ),
        },
    },
    const.PET_TYPE_ROBOT: {
        "id": const.PET_TYPE_ROBOT,
        "display_name": "Robot",
        "max_stage": 3,
        "stages": {
            1: _stage(
                const.PET_STAGE_EGG,
                "Parts box",
                50,
                ["Beep... assembling...", "Charging battery..."],
                "pets/robot/egg.png",
            ),
            2: _stage(
                const.PET_STAGE_BABY,
                "Mini robot",
                150,
                ["Beep boop! Hello!", "Mission accepted!"],
                "pets/robot/baby.png",
            ),
            3: _stage(
                const.PET_STAGE_ADULT,
                "Super robot",
                FINAL_STAGE_MAX_EXP,
                ["Mission complete! Peak efficiency!", "Together we're unstoppable!"],
                "pets/robot/adult.png",
            ),
        },
    },
}

CHARACTERS: tuple[CharacterData, ...] = (
    {
        "id": "dino",
        "name": "Dino",
        "category": const.CHARACTER_CATEGORY_BOY,  # type: ignore[typeddict-item]
        "emoji": "🦕",
        "description": "A brave baby dinosaur",
    },
    {
        "id": "turbo",
        "name": "Turbo",
        "category": const.CHARACTER_CATEGORY_BOY,  # type: ignore[typeddict-item]
        "emoji": "🏎️",
        "description": "A super car as fast as lightning",
    },
    {
        "id": "kick",
        "name": "Kick",
        "category": const.CHARACTER_CATEGORY_BOY,  # type: ignore[typeddict-item]
        "emoji": "⚽",
        "description": "A friend who dreams of being a soccer star",
    },
    {
        "id": "cosmo",
        "name": "Cosmo",
        "category": const.CHARACTER_CATEGORY_BOY,  # type: ignore[typeddict-item]
        "emoji": "🚀",
        "description": "A little astronaut exploring space",
    },
    {
        "id": "bolt",
        "name": "Bolt",
        "category": const.CHARACTER_CATEGORY_BOY,  # type: ignore[typeddict-item]
        "emoji": "🤖",
        "description": "A clever mini robot friend",
    },
    {
        "id": "princess",
        "name": "Princess",
        "category": const.CHARACTER_CATEGORY_GIRL,  # type: ignore[typeddict-item]
        "emoji": "👸",
        "description": "A princess with a magic wand",
    },
    {
        "id": "uni",
        "name": "Uni",
        "category": const.CHARACTER_CATEGORY_GIRL,  # type: ignore[typeddict-item]
        "emoji": "🦄",
        "description": "A rainbow baby unicorn",
    },
    {
        "id": "bunny",
        "name": "Bunny",
        "category": const.CHARACTER_CATEGORY_GIRL,  # type: ignore[typeddict-item]
        "emoji": "🐰",
        "description": "A bunny who loves flowers",
    },
    {
        "id": "marina",
        "name": "Marina",
        "category": const.CHARACTER_CATEGORY_GIRL,  # type: ignore[typeddict-item]
        "emoji": "🧜‍♀️",
        "description": "A mermaid from the sea",
    },
    {
        "id": "bella",
        "name": "Bella",
        "category": const.CHARACTER_CATEGORY_GIRL,  # type: ignore[typeddict-item]
        "emoji": "🩰",
        "description": "A dancing ballerina",
    },
)


class PetEngine:
    """Pure logic engine for pet growth and character lookups.

    All methods are static - no instance state. Catalog lookups on an unknown
    type or stage are programmer errors and raise; they are never reachable
    from validated user input.
    """

    @staticmethod
    def _registry_entry(pet_type: str) -> PetConfig:
        try:
            return PET_REGISTRY[pet_type]
        except (KeyError, TypeError) as err:
            raise InvalidPetTypeError(pet_type) from err

    @staticmethod
    def is_valid_type(pet_type: object) -> bool:
        """Return True if ``pet_type`` is in the catalog."""
        return isinstance(pet_type, str) and pet_type in PET_REGISTRY

    @staticmethod
    def get_config(pet_type: str) -> dict[str, object]:
        """Return type-level metadata: ``id``, ``display_name`` and ``max_stage``.

        Raises:
            InvalidPetTypeError: If the type is not in the catalog.
        """
        config = PetEngine._registry_entry(pet_type)
        return {
            "id": config["id"],
            "display_name": config["display_name"],
            "max_stage": config["max_stage"],
        }

    @staticmethod
    def get_max_stage(pet_type: str) -> int:
        """Return the final stage number for a type."""
        return PetEngine._registry_entry(pet_type)["max_stage"]

    @staticmethod
    def get_stage_config(pet_type: str, stage: int) -> StageConfig:
        """Return the stage record for ``(pet_type, stage)``.

        Raises:
            InvalidPetTypeError: If the type is not in the catalog.
            InvalidPetStageError: If the stage is outside ``1..max_stage``.
        """
        config = PetEngine._registry_entry(pet_type)
        if isinstance(stage, bool) or stage not in config["stages"]:
            raise InvalidPetStageError(pet_type, stage, config["max_stage"])
        return config["stages"][stage]

    @staticmethod
    def get_asset(pet_type: str, stage: int) -> str:
        """Return the visual asset reference for a stage."""
        return PetEngine.get_stage_config(pet_type, stage)["asset"]

    @staticmethod
    def get_random_dialogue(pet_type: str, stage: int) -> str:
        """Return one line picked uniformly from the stage's dialogue pool."""
        return random.choice(PetEngine.get_stage_config(pet_type, stage)["dialogues"])

    @staticmethod
    def can_evolve(pet_type: str, stage: int, exp: int) -> bool:
        """Return True if the pet is below its final stage and has enough exp.

        Always False at the final stage, whatever the exp.
        """
        if stage >= PetEngine.get_max_stage(pet_type):
            return False
        return exp >= PetEngine.get_stage_config(pet_type, stage)["max_exp"]

    @staticmethod
    def get_all_types() -> list[str]:
        """Return every supported pet type, in catalog order."""
        return list(PET_REGISTRY)

    @staticmethod
    def get_exp_progress(pet_type: str, stage: int, exp: int) -> float:
        """Return progress toward the next stage as a fraction in [0, 1].

        The final stage always reports 1.0.
        """
        if stage >= PetEngine.get_max_stage(pet_type):
            return 1.0
        max_exp = PetEngine.get_stage_config(pet_type, stage)["max_exp"]
        return min(max(exp, 0) / max_exp, 1.0)

    @staticmethod
    def evaluate_evolution(pet_type: str, stage: int, exp: int) -> PetGrowthEffect:
        """Advance at most one stage if the thresholds allow it.

        Surplus exp above the threshold carries over into the new stage.
        """
        if not PetEngine.can_evolve(pet_type, stage, exp):
            return PetGrowthEffect(
                stage=stage, exp=exp, evolved=False, previous_stage=stage
            )
        max_exp = PetEngine.get_stage_config(pet_type, stage)["max_exp"]
        return PetGrowthEffect(
            stage=stage + 1, exp=exp - max_exp, evolved=True, previous_stage=stage
        )

    @staticmethod
    def apply_exp(pet_state: PetStateData, amount: int) -> PetGrowthEffect:
        """Add ``amount`` exp to a pet and evaluate evolution once.

        Negative amounts are treated as zero; exp never goes below zero.
        """
        exp = max(pet_state["exp"], 0) + max(amount, 0)
        return PetEngine.evaluate_evolution(pet_state["type"], pet_state["stage"], exp)

    @staticmethod
    def build_default_state(
        pet_type: str = const.DEFAULT_PET_TYPE, now_iso: str = ""
    ) -> PetStateData:
        """Return a fresh stage-1 pet of ``pet_type``.

        Raises:
            InvalidPetTypeError: If the type is not in the catalog.
        """
        PetEngine._registry_entry(pet_type)
        return {
            const.DATA_PET_TYPE: pet_type,  # type: ignore[typeddict-item]
            const.DATA_PET_STAGE: const.DEFAULT_PET_STAGE,
            const.DATA_PET_EXP: const.DEFAULT_ZERO,
            const.DATA_PET_LAST_INTERACTION: now_iso,
            const.DATA_PET_CREATED_AT: now_iso,
        }

    @staticmethod
    def get_character_by_id(character_id: str | None) -> CharacterData | None:
        """Return the character with ``character_id`` or None."""
        return next((c for c in CHARACTERS if c["id"] == character_id), None)

    @staticmethod
    def get_characters_by_category(category: str) -> list[CharacterData]:
        """Return the characters in ``category`` (``boy`` or ``girl``)."""
        return [c for c in CHARACTERS if c["category"] == category]
