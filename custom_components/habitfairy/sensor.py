# File: sensor.py
"""Sensors for the Habit Fairy integration.

One set of sensors per config entry (one child):

01. TotalStarsSensor - spendable star balance, shop and avatar attributes
02. StreakDaysSensor - consecutive days with a completion, weekly chart attributes
03. TodayCompletedSensor - missions completed today out of the active total
04. PetStageSensor - growth stage of the pet with exp progress
"""

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import HabitFairyCoordinator
from .engines import AVATAR_ITEMS, PetEngine
from .entity import HabitFairyCoordinatorEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for Habit Fairy integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: HabitFairyCoordinator = data[const.COORDINATOR]

    async_add_entities(
        [
            TotalStarsSensor(coordinator, entry),
            StreakDaysSensor(coordinator, entry),
            TodayCompletedSensor(coordinator, entry),
            PetStageSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
class TotalStarsSensor(HabitFairyCoordinatorEntity, SensorEntity):
    """Sensor for the child's spendable star balance.

    Uses MEASUREMENT state class for graphing. Owned and equipped items ride
    along as attributes so a dashboard can render the avatar.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_TOTAL_STARS
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = const.LABEL_STARS

    def __init__(self, coordinator: HabitFairyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_TOTAL_STARS)

    @property
    def native_value(self) -> int:
        """Return the star balance."""
        return self.coordinator.total_stars

    @property
    def icon(self) -> str:
        """Return range-based icon based on current stars."""
        stars = self.native_value or 0
        if stars >= 100:
            return "mdi:star"
        if stars >= 50:
            return "mdi:star-half-full"
        return "mdi:star-outline"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose profile, inventory and the item shop."""
        return {
            const.ATTR_CHILD_NAME: self.coordinator.child_name,
            const.ATTR_SELECTED_CHARACTER: self.coordinator.selected_character,
            const.ATTR_OWNED_ITEMS: list(self.coordinator.owned_items),
            const.ATTR_EQUIPPED_ITEMS: dict(self.coordinator.equipped_items),
            const.ATTR_STAR_LEDGER: list(self.coordinator.star_ledger),
            const.ATTR_SHOP_ITEMS: [dict(item) for item in AVATAR_ITEMS],
        }


# ------------------------------------------------------------------------------------------
class StreakDaysSensor(HabitFairyCoordinatorEntity, SensorEntity):
    """Sensor for the current streak of days with at least one completed mission."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_STREAK_DAYS
    _attr_native_unit_of_measurement = const.LABEL_DAYS
    _attr_icon = "mdi:fire"

    def __init__(self, coordinator: HabitFairyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_STREAK_DAYS)

    @property
    def native_value(self) -> int:
        """Return the streak length in days."""
        return self.coordinator.get_streak_days()

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the last 7 days of completion statistics."""
        summary = self.coordinator.get_dashboard_summary()
        return {
            const.ATTR_LAST_7_DAYS: summary["weekly_stats"],
            const.ATTR_WEEKLY_AVERAGE_RATE: summary["weekly_average_rate"],
        }


# ------------------------------------------------------------------------------------------
class TodayCompletedSensor(HabitFairyCoordinatorEntity, SensorEntity):
    """Sensor for the number of missions completed today."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_TODAY_COMPLETED
    _attr_icon = "mdi:checkbox-marked-circle-outline"

    def __init__(self, coordinator: HabitFairyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_TODAY_COMPLETED)

    @property
    def native_value(self) -> int:
        """Return how many missions were completed today."""
        return len(self.coordinator.get_today_completed())

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose today's completed ids, the active total and the rate."""
        summary = self.coordinator.get_dashboard_summary()
        return {
            const.ATTR_COMPLETED_MISSIONS: self.coordinator.get_today_completed(),
            const.ATTR_TODAY_TOTAL: summary["today_total"],
            const.ATTR_TODAY_RATE: summary["today_rate"],
        }


# ------------------------------------------------------------------------------------------
class PetStageSensor(HabitFairyCoordinatorEntity, SensorEntity):
    """Sensor for the pet's growth stage.

    Attributes carry what a pet card needs: type, exp, progress toward the next
    stage, the stage's display name and a dialogue line.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_PET_STAGE

    def __init__(self, coordinator: HabitFairyCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_PET_STAGE)

    @property
    def native_value(self) -> int:
        """Return the pet's stage number."""
        return self.coordinator.pet[const.DATA_PET_STAGE]

    @property
    def icon(self) -> str:
        """Return an icon matching the stage."""
        pet = self.coordinator.pet
        stage_name = PetEngine.get_stage_config(
            pet[const.DATA_PET_TYPE], pet[const.DATA_PET_STAGE]
        )["name"]
        if stage_name == const.PET_STAGE_EGG:
            return "mdi:egg-outline"
        if stage_name == const.PET_STAGE_BABY:
            return "mdi:baby-face-outline"
        return "mdi:creation"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose pet details."""
        pet = self.coordinator.pet
        stage_config = PetEngine.get_stage_config(
            pet[const.DATA_PET_TYPE], pet[const.DATA_PET_STAGE]
        )
        return {
            const.ATTR_PET_TYPE: pet[const.DATA_PET_TYPE],
            const.ATTR_STAGE: pet[const.DATA_PET_STAGE],
            const.ATTR_STAGE_DISPLAY_NAME: stage_config["display_name"],
            const.ATTR_EXP: pet[const.DATA_PET_EXP],
            const.ATTR_EXP_PROGRESS: round(self.coordinator.get_exp_progress(), 3),
            const.ATTR_DIALOGUE: self.coordinator.get_pet_dialogue(),
        }
