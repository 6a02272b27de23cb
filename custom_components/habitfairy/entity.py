"""Base entity classes for Habit Fairy integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import HabitFairyCoordinator


class HabitFairyCoordinatorEntity(CoordinatorEntity[HabitFairyCoordinator]):
    """Base entity class for Habit Fairy sensors with typed coordinator access.

    All entities of one config entry hang off a single device named after the
    child, so they are grouped together in the UI.
    """

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: HabitFairyCoordinator, entry: ConfigEntry, uid_suffix: str
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: HabitFairyCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            uid_suffix: Suffix appended to the entry id to form the unique id.
        """
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{uid_suffix}"
        self._attr_device_info = DeviceInfo(
            identifiers={(const.DOMAIN, entry.entry_id)},
            name=coordinator.child_name or entry.title,
            manufacturer=const.DEVICE_MANUFACTURER,
            model=const.DEVICE_MODEL,
        )

    @property
    def coordinator(self) -> HabitFairyCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: HabitFairyCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
