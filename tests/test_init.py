"""Tests for setting up, unloading and removing the Habit Fairy entry."""

from typing import Any

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.habitfairy import const
from custom_components.habitfairy.coordinator import HabitFairyCoordinator
from custom_components.habitfairy.storage_manager import HassStoreBackend
from tests.helpers import stored_slice


async def test_setup_entry(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Setup loads the coordinator and the storage backend."""
    assert init_integration.state is ConfigEntryState.LOADED

    entry_data = hass.data[const.DOMAIN][init_integration.entry_id]
    assert isinstance(entry_data[const.COORDINATOR], HabitFairyCoordinator)
    assert isinstance(entry_data[const.STORAGE_MANAGER], HassStoreBackend)
    assert entry_data[const.COORDINATOR].is_loaded


async def test_unload_entry_flushes_and_removes_services(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    init_integration: MockConfigEntry,
    coordinator: HabitFairyCoordinator,
) -> None:
    """Unloading waits for saves and unregisters the services."""
    coordinator.complete_mission("mission-eat", 1)

    assert await hass.config_entries.async_unload(init_integration.entry_id)
    await hass.async_block_till_done()

    assert init_integration.state is ConfigEntryState.NOT_LOADED
    assert init_integration.entry_id not in hass.data[const.DOMAIN]
    assert not hass.services.has_service(const.DOMAIN, const.SERVICE_COMPLETE_MISSION)
    assert stored_slice(hass_storage, const.SLICE_ECONOMY)["total_stars"] == 1


async def test_remove_entry_deletes_storage(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    init_integration: MockConfigEntry,
) -> None:
    """Removing the entry deletes the store file."""
    assert const.STORAGE_KEY in hass_storage

    assert await hass.config_entries.async_remove(init_integration.entry_id)
    await hass.async_block_till_done()

    assert const.STORAGE_KEY not in hass_storage
