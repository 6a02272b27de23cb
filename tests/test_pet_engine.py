"""Unit tests for PetEngine - pure Python logic tests.

Test Categories:
- Catalog lookups and their errors
- Evolution rule (one stage per evaluation, surplus carries over)
- Exp application and progress
- Characters
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from custom_components.habitfairy import const
from custom_components.habitfairy.engines.pet_engine import (
    CHARACTERS,
    FINAL_STAGE_MAX_EXP,
    PET_REGISTRY,
    InvalidPetStageError,
    InvalidPetTypeError,
    PetEngine,
    PetGrowthEffect,
)


def _pet(pet_type: str = "fairy", stage: int = 1, exp: int = 0) -> dict:
    return {
        const.DATA_PET_TYPE: pet_type,
        const.DATA_PET_STAGE: stage,
        const.DATA_PET_EXP: exp,
        const.DATA_PET_LAST_INTERACTION: "",
        const.DATA_PET_CREATED_AT: "",
    }


# =============================================================================
# Test: Catalog lookups
# =============================================================================


class TestCatalog:
    """Tests for pet catalog access."""

    def test_all_types(self) -> None:
        """Three pet types in catalog order."""
        assert PetEngine.get_all_types() == ["fairy", "dino", "robot"]

    @pytest.mark.parametrize("pet_type", ["fairy", "dino", "robot"])
    def test_every_type_has_three_stages_with_dialogue(self, pet_type) -> None:
        """Each type has stages 1..3, non-empty dialogues and an asset."""
        assert PetEngine.get_max_stage(pet_type) == 3
        for stage in (1, 2, 3):
            config = PetEngine.get_stage_config(pet_type, stage)
            assert config["dialogues"]
            assert PetEngine.get_asset(pet_type, stage)
        assert PetEngine.get_stage_config(pet_type, 3)["max_exp"] == FINAL_STAGE_MAX_EXP

    def test_fairy_thresholds(self) -> None:
        """Fairy evolves at 50 then 150 exp."""
        assert PetEngine.get_stage_config("fairy", 1)["max_exp"] == 50
        assert PetEngine.get_stage_config("fairy", 2)["max_exp"] == 150
        assert PetEngine.get_stage_config("fairy", 1)["name"] == const.PET_STAGE_EGG

    def test_get_config(self) -> None:
        """Type metadata without the stage table."""
        assert PetEngine.get_config("dino") == {
            "id": "dino",
            "display_name": "Dino",
            "max_stage": 3,
        }

    def test_unknown_type_raises(self) -> None:
        """Unknown types raise InvalidPetTypeError, a ValueError."""
        with pytest.raises(InvalidPetTypeError) as exc_info:
            PetEngine.get_config("dragon")
        assert exc_info.value.pet_type == "dragon"
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize("stage", [0, 4, -1, True])
    def test_out_of_range_stage_raises(self, stage) -> None:
        """Stages outside 1..max_stage raise InvalidPetStageError."""
        with pytest.raises(InvalidPetStageError) as exc_info:
            PetEngine.get_stage_config("fairy", stage)
        assert exc_info.value.max_stage == 3

    def test_is_valid_type(self) -> None:
        """Only catalog strings are valid."""
        assert PetEngine.is_valid_type("robot")
        assert not PetEngine.is_valid_type("cat")
        assert not PetEngine.is_valid_type(None)

    def test_random_dialogue_comes_from_pool(self) -> None:
        """Dialogue is drawn from the stage's pool."""
        pool = PET_REGISTRY["fairy"]["stages"][2]["dialogues"]
        with patch(
            "custom_components.habitfairy.engines.pet_engine.random.choice",
            side_effect=lambda seq: seq[-1],
        ):
            assert PetEngine.get_random_dialogue("fairy", 2) == pool[-1]
        assert PetEngine.get_random_dialogue("fairy", 2) in pool


# =============================================================================
# Test: Evolution
# =============================================================================


class TestEvolution:
    """Tests for can_evolve / evaluate_evolution."""

    @pytest.mark.parametrize(
        ("stage", "exp", "expected"),
        [
            (1, 49, False),
            (1, 50, True),
            (2, 149, False),
            (2, 150, True),
            (3, 10_000_000, False),
        ],
    )
    def test_can_evolve(self, stage, exp, expected) -> None:
        """Evolution needs exp at the threshold and a stage below the max."""
        assert PetEngine.can_evolve("fairy", stage, exp) is expected

    def test_surplus_carries_over(self) -> None:
        """60 exp at stage 1 becomes stage 2 with 10 exp."""
        effect = PetEngine.evaluate_evolution("fairy", 1, 60)
        assert effect == PetGrowthEffect(stage=2, exp=10, evolved=True, previous_stage=1)

    def test_one_stage_per_evaluation(self) -> None:
        """Exp past two thresholds still advances only one stage."""
        effect = PetEngine.evaluate_evolution("fairy", 1, 500)
        assert effect.stage == 2
        assert effect.exp == 450
        assert effect.evolved is True

        second = PetEngine.evaluate_evolution("fairy", effect.stage, effect.exp)
        assert second.stage == 3
        assert second.exp == 300

    def test_no_evolution_keeps_state(self) -> None:
        """Below threshold nothing changes."""
        effect = PetEngine.evaluate_evolution("dino", 2, 20)
        assert effect == PetGrowthEffect(stage=2, exp=20, evolved=False, previous_stage=2)


# =============================================================================
# Test: apply_exp / get_exp_progress / build_default_state
# =============================================================================


class TestApplyExp:
    """Tests for adding exp to a pet state."""

    def test_adds_and_evolves(self) -> None:
        """45 + 10 crosses the egg threshold."""
        effect = PetEngine.apply_exp(_pet(exp=45), 10)
        assert (effect.stage, effect.exp, effect.evolved) == (2, 5, True)

    def test_negative_amount_is_ignored(self) -> None:
        """Exp never decreases."""
        effect = PetEngine.apply_exp(_pet(exp=5), -20)
        assert effect.exp == 5

    def test_state_is_not_mutated(self) -> None:
        """apply_exp returns an effect and leaves the input alone."""
        pet = _pet(exp=45)
        PetEngine.apply_exp(pet, 10)
        assert pet[const.DATA_PET_EXP] == 45

    @pytest.mark.parametrize(
        ("stage", "exp", "expected"),
        [(1, 0, 0.0), (1, 25, 0.5), (2, 75, 0.5), (1, 80, 1.0), (3, 5, 1.0)],
    )
    def test_exp_progress(self, stage, exp, expected) -> None:
        """Progress is exp/threshold, capped at 1, and 1.0 at the final stage."""
        assert PetEngine.get_exp_progress("fairy", stage, exp) == pytest.approx(expected)

    def test_default_state(self) -> None:
        """A new pet starts at stage 1 with zero exp."""
        pet = PetEngine.build_default_state("robot", "2026-01-01T00:00:00+00:00")
        assert pet[const.DATA_PET_TYPE] == "robot"
        assert pet[const.DATA_PET_STAGE] == 1
        assert pet[const.DATA_PET_EXP] == 0
        assert pet[const.DATA_PET_CREATED_AT] == "2026-01-01T00:00:00+00:00"

    def test_default_state_rejects_unknown_type(self) -> None:
        """Unknown types cannot be hatched."""
        with pytest.raises(InvalidPetTypeError):
            PetEngine.build_default_state("dragon")


# =============================================================================
# Test: Characters
# =============================================================================


class TestCharacters:
    """Tests for the character catalog."""

    def test_ten_characters_split_by_category(self) -> None:
        """Five boy and five girl characters with unique ids."""
        assert len({c["id"] for c in CHARACTERS}) == 10
        assert len(PetEngine.get_characters_by_category(const.CHARACTER_CATEGORY_BOY)) == 5
        assert len(PetEngine.get_characters_by_category(const.CHARACTER_CATEGORY_GIRL)) == 5

    def test_lookup(self) -> None:
        """Known ids resolve; unknown ids give None."""
        assert PetEngine.get_character_by_id(const.DEFAULT_CHARACTER_ID)["name"] == "Dino"
        assert PetEngine.get_character_by_id("ghost") is None
