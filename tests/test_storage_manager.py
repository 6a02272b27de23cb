"""Tests for the storage layer.

HabitFairyStorage is exercised against an in-memory backend; HassStoreBackend
against the mocked Home Assistant store (``hass_storage``).
"""

import json
import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest
from homeassistant.core import HomeAssistant

from custom_components.habitfairy.const import STORAGE_KEY, STORAGE_PREFIX
from custom_components.habitfairy.storage_manager import (
    HabitFairyStorage,
    HassStoreBackend,
)
from tests.helpers import InMemoryBackend, store_slices

# =============================================================================
# Test: HabitFairyStorage
# =============================================================================


class TestHabitFairyStorage:
    """Tests for the namespaced JSON adapter."""

    async def test_round_trip(self) -> None:
        """A saved value loads back equal."""
        storage = HabitFairyStorage(InMemoryBackend())
        value = {"total_stars": 7, "owned_items": ["hat-crown"], "name": "미아"}

        await storage.async_set("economy", value)

        assert await storage.async_get("economy", {}) == value

    async def test_keys_are_namespaced(self) -> None:
        """Raw keys carry the prefix and raw values are JSON text."""
        backend = InMemoryBackend()
        storage = HabitFairyStorage(backend)

        await storage.async_set("pet", {"stage": 2})

        assert list(backend.items) == [f"{STORAGE_PREFIX}pet"]
        assert json.loads(backend.items[f"{STORAGE_PREFIX}pet"]) == {"stage": 2}

    async def test_missing_key_returns_fallback(self) -> None:
        """Absent keys give the fallback."""
        storage = HabitFairyStorage(InMemoryBackend())
        assert await storage.async_get("missions", {"custom": []}) == {"custom": []}

    async def test_stored_null_returns_fallback(self) -> None:
        """An explicit JSON null gives the fallback."""
        storage = HabitFairyStorage(InMemoryBackend({f"{STORAGE_PREFIX}pet": "null"}))
        assert await storage.async_get("pet", "fallback") == "fallback"

    async def test_corrupt_payload_returns_fallback_and_logs(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Invalid JSON gives the fallback and an error log line."""
        storage = HabitFairyStorage(
            InMemoryBackend({f"{STORAGE_PREFIX}economy": "{broken"})
        )

        with caplog.at_level(logging.ERROR):
            assert await storage.async_get("economy", 42) == 42
        assert "Corrupt payload" in caplog.text

    async def test_remove(self) -> None:
        """Removed keys read as fallback; removing twice is fine."""
        storage = HabitFairyStorage(InMemoryBackend())
        await storage.async_set("profile", {"child_name": "Mia"})

        await storage.async_remove("profile")
        await storage.async_remove("profile")

        assert await storage.async_get("profile", None) is None

    async def test_unserializable_value_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Values json cannot encode are dropped with an error log."""
        backend = InMemoryBackend()
        storage = HabitFairyStorage(backend)

        with caplog.at_level(logging.ERROR):
            await storage.async_set("economy", {"bad": {1, 2}})

        assert backend.items == {}
        assert "non-serializable" in caplog.text

    async def test_backend_write_error_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """File system errors during save are swallowed after logging."""
        backend = InMemoryBackend()
        backend.async_set_item = AsyncMock(side_effect=OSError("disk full"))
        storage = HabitFairyStorage(backend)

        with caplog.at_level(logging.ERROR):
            await storage.async_set("pet", {"stage": 1})

        assert "disk full" in caplog.text


# =============================================================================
# Test: HassStoreBackend
# =============================================================================


class TestHassStoreBackend:
    """Tests for the Home Assistant Store backed key-value store."""

    async def test_reads_existing_file(
        self, hass: HomeAssistant, hass_storage: dict[str, Any]
    ) -> None:
        """Items preloaded into the store file are visible."""
        store_slices(hass_storage, {"economy": {"total_stars": 3}})
        backend = HassStoreBackend(hass)

        raw = await backend.async_get_item(f"{STORAGE_PREFIX}economy")

        assert json.loads(raw) == {"total_stars": 3}

    async def test_set_and_remove_write_the_file(
        self, hass: HomeAssistant, hass_storage: dict[str, Any]
    ) -> None:
        """Every set or remove rewrites the store file."""
        backend = HassStoreBackend(hass)

        await backend.async_set_item("habit-fairy:pet", '{"stage": 1}')
        assert hass_storage[STORAGE_KEY]["data"] == {"habit-fairy:pet": '{"stage": 1}'}

        await backend.async_remove_item("habit-fairy:pet")
        assert hass_storage[STORAGE_KEY]["data"] == {}

    async def test_missing_file_starts_empty(self, hass: HomeAssistant) -> None:
        """No store file means no items."""
        backend = HassStoreBackend(hass)
        assert await backend.async_get_item("habit-fairy:pet") is None

    async def test_unexpected_file_content_starts_empty(
        self, hass: HomeAssistant, hass_storage: dict[str, Any]
    ) -> None:
        """A store file that is not a key map is ignored."""
        hass_storage[STORAGE_KEY] = {
            "version": 1,
            "minor_version": 1,
            "key": STORAGE_KEY,
            "data": ["not", "a", "map"],
        }
        backend = HassStoreBackend(hass)
        assert await backend.async_get_item("habit-fairy:pet") is None

    async def test_full_adapter_round_trip(
        self, hass: HomeAssistant, hass_storage: dict[str, Any]
    ) -> None:
        """Adapter plus Store backend persist across instances."""
        await HabitFairyStorage(HassStoreBackend(hass)).async_set(
            "completed_missions", {"2026-03-10": ["mission-eat"]}
        )

        reloaded = HabitFairyStorage(HassStoreBackend(hass))
        assert await reloaded.async_get("completed_missions", {}) == {
            "2026-03-10": ["mission-eat"]
        }

    async def test_delete_storage(
        self, hass: HomeAssistant, hass_storage: dict[str, Any]
    ) -> None:
        """Deleting the storage forgets all items."""
        store_slices(hass_storage, {"pet": {"stage": 2}})
        backend = HassStoreBackend(hass)

        await backend.async_delete_storage()

        assert await backend.async_get_item(f"{STORAGE_PREFIX}pet") is None
        assert STORAGE_KEY not in hass_storage
