"""Tests for Habit Fairy diagnostics."""

from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.habitfairy import const
from custom_components.habitfairy.coordinator import HabitFairyCoordinator
from custom_components.habitfairy.diagnostics import (
    async_get_config_entry_diagnostics,
)


async def test_config_entry_diagnostics(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,
    coordinator: HabitFairyCoordinator,
) -> None:
    """Diagnostics export every slice plus the dashboard summary."""
    coordinator.complete_mission("mission-eat", 3)

    result = await async_get_config_entry_diagnostics(hass, init_integration)

    assert not coordinator.has_pending_saves
    assert result["storage_path"].endswith(const.STORAGE_KEY)
    assert set(result["slices"]) == set(const.ALL_SLICES)
    assert result["slices"][const.SLICE_ECONOMY][const.DATA_TOTAL_STARS] == 3
    assert result["slices"][const.SLICE_PROFILE][const.DATA_CHILD_NAME] == "Mia"
    assert result["summary"]["today_completed"] == 1
    assert result["summary"]["total_stars"] == 3
