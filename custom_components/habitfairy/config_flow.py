# File: config_flow.py
"""Config flow for the Habit Fairy integration.

A single step asks for the child's name, the profile character and the pet to
raise. Only one Habit Fairy entry may exist per Home Assistant instance.
"""

from typing import Any, Optional

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.helpers import selector

from . import const
from .engines import CHARACTERS, PetEngine

# pylint: disable=abstract-method


def _build_user_schema(defaults: dict[str, Any]) -> vol.Schema:
    """Build the schema of the setup form."""
    return vol.Schema(
        {
            vol.Required(
                const.CONF_CHILD_NAME, default=defaults.get(const.CONF_CHILD_NAME, "")
            ): str,
            vol.Required(
                const.CONF_CHARACTER,
                default=defaults.get(const.CONF_CHARACTER, const.DEFAULT_CHARACTER_ID),
            ): selector.SelectSelector(
                selector.SelectSelectorConfig(
                    options=[
                        selector.SelectOptionDict(
                            value=character["id"],
                            label=f"{character['emoji']} {character['name']}",
                        )
                        for character in CHARACTERS
                    ],
                    mode=selector.SelectSelectorMode.DROPDOWN,
                )
            ),
            vol.Required(
                const.CONF_PET_TYPE,
                default=defaults.get(const.CONF_PET_TYPE, const.DEFAULT_PET_TYPE),
            ): selector.SelectSelector(
                selector.SelectSelectorConfig(
                    options=PetEngine.get_all_types(),
                    mode=selector.SelectSelectorMode.LIST,
                    translation_key=const.CONF_PET_TYPE,
                )
            ),
        }
    )


class HabitFairyConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Habit Fairy."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Ask for the child's name, character and pet."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            child_name = user_input[const.CONF_CHILD_NAME].strip()
            if not child_name:
                errors[const.CONF_CHILD_NAME] = const.TRANS_KEY_CFOF_INVALID_CHILD_NAME
            else:
                const.LOGGER.debug(
                    "DEBUG: Config Flow - Creating entry for child '%s'", child_name
                )
                return self.async_create_entry(
                    title=f"{const.INTEGRATION_TITLE} ({child_name})",
                    data={**user_input, const.CONF_CHILD_NAME: child_name},
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=_build_user_schema(user_input or {}),
            errors=errors,
        )
