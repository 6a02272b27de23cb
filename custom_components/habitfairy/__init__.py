# File: __init__.py
"""Initialization file for the Habit Fairy integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization; all persisted slices are loaded before entities exist.
- First-run profile and pet choices taken from the config entry.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import HabitFairyCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import HabitFairyStorage, HassStoreBackend


def _apply_first_run_choices(
    coordinator: HabitFairyCoordinator, entry: ConfigEntry
) -> None:
    """Seed the profile and pet from the config flow answers on first run only."""
    if not coordinator.is_first_run:
        return

    const.LOGGER.info("INFO: First run, applying setup choices from config entry")
    if child_name := entry.data.get(const.CONF_CHILD_NAME):
        coordinator.set_child_name(child_name)
    if character := entry.data.get(const.CONF_CHARACTER):
        coordinator.select_character(character)
    pet_type = entry.data.get(const.CONF_PET_TYPE)
    if pet_type and pet_type != coordinator.pet[const.DATA_PET_TYPE]:
        coordinator.change_pet_type(pet_type)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Habit Fairy entry: %s", entry.entry_id)

    # Slices are stored as JSON text under namespaced keys in one HA store file
    backend = HassStoreBackend(hass, const.STORAGE_KEY)
    storage = HabitFairyStorage(backend)

    coordinator = HabitFairyCoordinator(hass, entry, storage)

    try:
        # Perform the first refresh to load data.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to load Habit Fairy data: %s", e)
        raise

    _apply_first_run_choices(coordinator, entry)

    # Streak and "today" values change at midnight without any mutation
    entry.async_on_unload(coordinator.async_track_day_rollover())

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: backend,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    const.LOGGER.info("INFO: Habit Fairy setup complete for entry: %s", entry.entry_id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Habit Fairy entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        # Let scheduled saves land before the coordinator goes away
        await entry_data[const.COORDINATOR].async_flush()

        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing Habit Fairy entry: %s", entry.entry_id)

    if const.DOMAIN in hass.data and entry.entry_id in hass.data[const.DOMAIN]:
        backend: HassStoreBackend = hass.data[const.DOMAIN][entry.entry_id][
            const.STORAGE_MANAGER
        ]
    else:
        backend = HassStoreBackend(hass, const.STORAGE_KEY)
    await backend.async_delete_storage()

    const.LOGGER.info("INFO: Habit Fairy entry data cleared: %s", entry.entry_id)
