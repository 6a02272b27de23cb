# File: services.py
"""Defines custom services for the Habit Fairy integration.

These services let the app, scripts and automations drive every mutation of the
coordinator. Each mutating service returns ``{"applied": bool, "reason": str|None}``
(plus details) when the caller asks for a response; rejected mutations change
nothing and are not errors.
"""

from typing import Any

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall, SupportsResponse
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import HabitFairyCoordinator, MutationResult
from .engines import CATEGORY_ORDER

# --- Service Schemas ---
MISSION_ID_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MISSION_ID): cv.string,
    }
)

COMPLETE_MISSION_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MISSION_ID): cv.string,
        vol.Required(const.FIELD_STAR_REWARD): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
    }
)

_MISSION_FIELDS = {
    vol.Optional(const.FIELD_NAME): cv.string,
    vol.Optional(const.FIELD_DESCRIPTION): cv.string,
    vol.Optional(const.FIELD_ICON): cv.string,
    vol.Optional(const.FIELD_CATEGORY): vol.In(CATEGORY_ORDER),
    vol.Optional(const.FIELD_TIMER_SECONDS): vol.All(
        vol.Coerce(int), vol.Range(min=0)
    ),
    vol.Optional(const.FIELD_STAR_REWARD): vol.All(vol.Coerce(int), vol.Range(min=1)),
    vol.Optional(const.FIELD_FAIRY_MESSAGE_START): cv.string,
    vol.Optional(const.FIELD_FAIRY_MESSAGE_COMPLETE): cv.string,
    vol.Optional(const.FIELD_IS_ACTIVE): cv.boolean,
}

ADD_CUSTOM_MISSION_SCHEMA = vol.Schema(
    {
        **_MISSION_FIELDS,
        vol.Required(const.FIELD_NAME): cv.string,
    }
)

UPDATE_MISSION_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MISSION_ID): cv.string,
        **_MISSION_FIELDS,
    }
)

REORDER_MISSION_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MISSION_ID): cv.string,
        vol.Required(const.FIELD_DIRECTION): vol.In(
            [const.REORDER_UP, const.REORDER_DOWN]
        ),
    }
)

PURCHASE_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_COST): vol.All(vol.Coerce(int), vol.Range(min=0)),
    }
)

TOGGLE_EQUIP_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_CATEGORY): cv.string,
    }
)

SELECT_CHARACTER_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CHARACTER_ID): cv.string,
    }
)

SET_CHILD_NAME_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
    }
)

CHANGE_PET_TYPE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_PET_TYPE): cv.string,
    }
)

EMPTY_SCHEMA = vol.Schema({})

# Service field names map one-to-one onto mission keys
_MISSION_FIELD_KEYS = {
    const.FIELD_NAME: const.DATA_MISSION_NAME,
    const.FIELD_DESCRIPTION: const.DATA_MISSION_DESCRIPTION,
    const.FIELD_ICON: const.DATA_MISSION_ICON,
    const.FIELD_CATEGORY: const.DATA_MISSION_CATEGORY,
    const.FIELD_TIMER_SECONDS: const.DATA_MISSION_TIMER_SECONDS,
    const.FIELD_STAR_REWARD: const.DATA_MISSION_STAR_REWARD,
    const.FIELD_FAIRY_MESSAGE_START: const.DATA_MISSION_FAIRY_MESSAGE_START,
    const.FIELD_FAIRY_MESSAGE_COMPLETE: const.DATA_MISSION_FAIRY_MESSAGE_COMPLETE,
    const.FIELD_IS_ACTIVE: const.DATA_MISSION_IS_ACTIVE,
}

SERVICES = [
    const.SERVICE_ADD_CUSTOM_MISSION,
    const.SERVICE_CHANGE_PET_TYPE,
    const.SERVICE_COMPLETE_MISSION,
    const.SERVICE_DELETE_CUSTOM_MISSION,
    const.SERVICE_INTERACT_WITH_PET,
    const.SERVICE_PURCHASE_ITEM,
    const.SERVICE_RELOAD_DATA,
    const.SERVICE_REORDER_MISSION,
    const.SERVICE_RESET_ALL_DATA,
    const.SERVICE_SELECT_CHARACTER,
    const.SERVICE_SET_CHILD_NAME,
    const.SERVICE_TOGGLE_EQUIP_ITEM,
    const.SERVICE_TOGGLE_MISSION,
    const.SERVICE_UPDATE_MISSION,
]


def get_coordinator(hass: HomeAssistant) -> HabitFairyCoordinator:
    """Return the coordinator of the loaded Habit Fairy entry.

    Raises:
        HomeAssistantError: If no entry is loaded.
    """
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        raise HomeAssistantError(const.ERROR_NOT_LOADED)
    entry_data = next(iter(domain_entries.values()))
    return entry_data[const.COORDINATOR]


def _mission_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Translate service call data into mission fields."""
    return {
        mission_key: data[field_name]
        for field_name, mission_key in _MISSION_FIELD_KEYS.items()
        if field_name in data
    }


def _response(service: str, result: MutationResult) -> dict[str, Any]:
    """Build the service response and log rejections."""
    if not result.applied:
        const.LOGGER.warning(
            "WARNING: %s: Rejected (%s)", service.replace("_", " ").title(), result.reason
        )
    return {
        const.RESPONSE_APPLIED: result.applied,
        const.RESPONSE_REASON: result.reason,
        **result.data,
    }


def async_setup_services(hass: HomeAssistant):
    """Register Habit Fairy services."""

    async def handle_complete_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle completing a mission for today."""
        coordinator = get_coordinator(hass)
        result = coordinator.complete_mission(
            call.data[const.FIELD_MISSION_ID], call.data[const.FIELD_STAR_REWARD]
        )
        return _response(const.SERVICE_COMPLETE_MISSION, result)

    async def handle_add_custom_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle creating a custom mission."""
        coordinator = get_coordinator(hass)
        result = coordinator.add_custom_mission(_mission_fields(call.data))
        return _response(const.SERVICE_ADD_CUSTOM_MISSION, result)

    async def handle_update_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle editing a mission."""
        coordinator = get_coordinator(hass)
        result = coordinator.update_mission(
            call.data[const.FIELD_MISSION_ID], _mission_fields(call.data)
        )
        return _response(const.SERVICE_UPDATE_MISSION, result)

    async def handle_toggle_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle activating or deactivating a mission."""
        coordinator = get_coordinator(hass)
        result = coordinator.toggle_mission(call.data[const.FIELD_MISSION_ID])
        return _response(const.SERVICE_TOGGLE_MISSION, result)

    async def handle_delete_custom_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle deleting a custom mission."""
        coordinator = get_coordinator(hass)
        result = coordinator.delete_custom_mission(call.data[const.FIELD_MISSION_ID])
        return _response(const.SERVICE_DELETE_CUSTOM_MISSION, result)

    async def handle_reorder_mission(call: ServiceCall) -> dict[str, Any]:
        """Handle moving a mission up or down."""
        coordinator = get_coordinator(hass)
        result = coordinator.reorder_mission(
            call.data[const.FIELD_MISSION_ID], call.data[const.FIELD_DIRECTION]
        )
        return _response(const.SERVICE_REORDER_MISSION, result)

    async def handle_purchase_item(call: ServiceCall) -> dict[str, Any]:
        """Handle buying an item with stars."""
        coordinator = get_coordinator(hass)
        result = coordinator.purchase_item(
            call.data[const.FIELD_ITEM_ID], call.data[const.FIELD_COST]
        )
        return _response(const.SERVICE_PURCHASE_ITEM, result)

    async def handle_toggle_equip_item(call: ServiceCall) -> dict[str, Any]:
        """Handle equipping or unequipping an owned item."""
        coordinator = get_coordinator(hass)
        result = coordinator.toggle_equip_item(
            call.data[const.FIELD_ITEM_ID], call.data[const.FIELD_CATEGORY]
        )
        return _response(const.SERVICE_TOGGLE_EQUIP_ITEM, result)

    async def handle_select_character(call: ServiceCall) -> dict[str, Any]:
        """Handle choosing the profile character."""
        coordinator = get_coordinator(hass)
        result = coordinator.select_character(call.data[const.FIELD_CHARACTER_ID])
        return _response(const.SERVICE_SELECT_CHARACTER, result)

    async def handle_set_child_name(call: ServiceCall) -> dict[str, Any]:
        """Handle setting the child's name."""
        coordinator = get_coordinator(hass)
        result = coordinator.set_child_name(call.data[const.FIELD_NAME])
        return _response(const.SERVICE_SET_CHILD_NAME, result)

    async def handle_interact_with_pet(_call: ServiceCall) -> dict[str, Any]:
        """Handle a tap on the pet."""
        coordinator = get_coordinator(hass)
        result = coordinator.interact_with_pet()
        return _response(const.SERVICE_INTERACT_WITH_PET, result)

    async def handle_change_pet_type(call: ServiceCall) -> dict[str, Any]:
        """Handle starting over with a different pet."""
        coordinator = get_coordinator(hass)
        result = coordinator.change_pet_type(call.data[const.FIELD_PET_TYPE])
        return _response(const.SERVICE_CHANGE_PET_TYPE, result)

    async def handle_reload_data(_call: ServiceCall) -> None:
        """Handle re-reading all data from storage."""
        coordinator = get_coordinator(hass)
        await coordinator.async_flush()
        await coordinator.async_load_data()
        const.LOGGER.info("INFO: Habit Fairy data reloaded from storage")

    async def handle_reset_all_data(_call: ServiceCall) -> None:
        """Handle clearing ALL Habit Fairy data (factory reset)."""
        coordinator = get_coordinator(hass)
        await coordinator.async_reset_all_data()
        const.LOGGER.info("INFO: Habit Fairy data has been reset to defaults")

    with_response = [
        (const.SERVICE_COMPLETE_MISSION, handle_complete_mission, COMPLETE_MISSION_SCHEMA),
        (const.SERVICE_ADD_CUSTOM_MISSION, handle_add_custom_mission, ADD_CUSTOM_MISSION_SCHEMA),
        (const.SERVICE_UPDATE_MISSION, handle_update_mission, UPDATE_MISSION_SCHEMA),
        (const.SERVICE_TOGGLE_MISSION, handle_toggle_mission, MISSION_ID_SCHEMA),
        (const.SERVICE_DELETE_CUSTOM_MISSION, handle_delete_custom_mission, MISSION_ID_SCHEMA),
        (const.SERVICE_REORDER_MISSION, handle_reorder_mission, REORDER_MISSION_SCHEMA),
        (const.SERVICE_PURCHASE_ITEM, handle_purchase_item, PURCHASE_ITEM_SCHEMA),
        (const.SERVICE_TOGGLE_EQUIP_ITEM, handle_toggle_equip_item, TOGGLE_EQUIP_ITEM_SCHEMA),
        (const.SERVICE_SELECT_CHARACTER, handle_select_character, SELECT_CHARACTER_SCHEMA),
        (const.SERVICE_SET_CHILD_NAME, handle_set_child_name, SET_CHILD_NAME_SCHEMA),
        (const.SERVICE_INTERACT_WITH_PET, handle_interact_with_pet, EMPTY_SCHEMA),
        (const.SERVICE_CHANGE_PET_TYPE, handle_change_pet_type, CHANGE_PET_TYPE_SCHEMA),
    ]
    for service, handler, schema in with_response:
        hass.services.async_register(
            const.DOMAIN,
            service,
            handler,
            schema=schema,
            supports_response=SupportsResponse.OPTIONAL,
        )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RELOAD_DATA,
        handle_reload_data,
        schema=EMPTY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_ALL_DATA,
        handle_reset_all_data,
        schema=EMPTY_SCHEMA,
    )

    const.LOGGER.debug("DEBUG: Habit Fairy services have been registered")


async def async_unload_services(hass: HomeAssistant):
    """Unregister Habit Fairy services when unloading the integration."""
    for service in SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Habit Fairy services have been unregistered")
