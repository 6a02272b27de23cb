"""Shared fixtures for Habit Fairy tests."""

from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.habitfairy.const import (
    CONF_CHARACTER,
    CONF_CHILD_NAME,
    CONF_PET_TYPE,
    COORDINATOR,
    DOMAIN,
    PET_TYPE_FAIRY,
)
from custom_components.habitfairy.coordinator import HabitFairyCoordinator

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title="Habit Fairy (Mia)",
        data={
            CONF_CHILD_NAME: "Mia",
            CONF_CHARACTER: "uni",
            CONF_PET_TYPE: PET_TYPE_FAIRY,
        },
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> MockConfigEntry:
    """Set up the integration with the mock config entry."""
    mock_config_entry.add_to_hass(hass)
    await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry


@pytest.fixture
def coordinator(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> HabitFairyCoordinator:
    """Return the coordinator of the set-up integration."""
    return hass.data[DOMAIN][init_integration.entry_id][COORDINATOR]
