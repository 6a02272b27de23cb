"""Diagnostics support for Habit Fairy integration.

The export holds every persisted slice exactly as the coordinator would save
it, so it can also serve as a manual backup of the child's progress.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import HabitFairyCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: HabitFairyCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    # Pending saves would make the export disagree with the file on disk
    await coordinator.async_flush()

    return {
        "storage_path": hass.data[const.DOMAIN][entry.entry_id][
            const.STORAGE_MANAGER
        ].get_storage_path(),
        "slices": coordinator.data,
        "summary": coordinator.get_dashboard_summary(),
    }
