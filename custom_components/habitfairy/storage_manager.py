# File: storage_manager.py
"""Handles persistent data storage for the Habit Fairy integration.

Two layers:

- ``HassStoreBackend`` is the raw key-value primitive: a flat mapping of
  namespaced keys to JSON text, kept inside one Home Assistant ``Store`` file.
- ``HabitFairyStorage`` is the adapter the coordinator talks to. It namespaces
  keys, serializes values to JSON, and fails safe on reads: a missing key, an
  explicit ``null`` or a corrupt payload all come back as the caller's fallback.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from homeassistant.helpers.storage import Store

from . import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

_T = TypeVar("_T")


class KeyValueBackend(Protocol):
    """Narrow get/set/remove contract over a string key-value store."""

    async def async_get_item(self, key: str) -> str | None:
        """Return the raw text stored under ``key`` or None."""

    async def async_set_item(self, key: str, raw: str) -> None:
        """Store raw text under ``key``."""

    async def async_remove_item(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""


class HassStoreBackend:
    """Key-value backend persisted through Home Assistant's Store helper.

    All items live in a single storage file as ``{key: raw_text}``. The file is
    read lazily on first access and rewritten on every set or remove.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the backend.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._items: dict[str, str] | None = None

    async def _async_items(self) -> dict[str, str]:
        """Return the in-memory item map, loading it from disk on first use."""
        if self._items is None:
            existing = await self._store.async_load()
            if existing is None:
                const.LOGGER.info(
                    "INFO: No existing storage found for '%s'. Starting empty",
                    self._storage_key,
                )
                self._items = {}
            elif not isinstance(existing, dict):
                const.LOGGER.error(
                    "ERROR: Storage file '%s' does not contain a key map (%s). Starting empty",
                    self._storage_key,
                    type(existing).__name__,
                )
                self._items = {}
            else:
                self._items = existing
                const.LOGGER.debug(
                    "DEBUG: Loaded %s stored keys from '%s'",
                    len(existing),
                    self._storage_key,
                )
        return self._items

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path

    async def async_get_item(self, key: str) -> str | None:
        """Return the raw text stored under ``key`` or None."""
        items = await self._async_items()
        return items.get(key)

    async def async_set_item(self, key: str, raw: str) -> None:
        """Store raw text under ``key`` and write the file."""
        items = await self._async_items()
        items[key] = raw
        await self._store.async_save(items)

    async def async_remove_item(self, key: str) -> None:
        """Remove ``key`` and write the file; missing keys are ignored."""
        items = await self._async_items()
        if key not in items:
            return
        del items[key]
        await self._store.async_save(items)

    async def async_delete_storage(self) -> None:
        """Forget every item and delete the storage file from disk."""
        self._items = {}
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s", self._store.path
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )


class HabitFairyStorage:
    """Namespaced JSON get/set/remove over a key-value backend."""

    def __init__(
        self, backend: KeyValueBackend, prefix: str = const.STORAGE_PREFIX
    ) -> None:
        """Initialize the adapter.

        Args:
            backend: Raw key-value store to read from and write to.
            prefix: Namespace prepended to every key (default: const.STORAGE_PREFIX).

        """
        self._backend = backend
        self._prefix = prefix

    @property
    def backend(self) -> KeyValueBackend:
        """Return the underlying key-value backend."""
        return self._backend

    def _namespaced(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def async_get(self, key: str, fallback: _T) -> _T:
        """Read and decode ``key``, returning ``fallback`` when nothing usable is stored.

        Absent keys, empty payloads and a stored ``null`` fall back silently.
        A payload that is not valid JSON also falls back, and is logged.
        """
        raw = await self._backend.async_get_item(self._namespaced(key))
        if not raw:
            return fallback

        try:
            value = json.loads(raw)
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Storage - Corrupt payload for key '%s', using fallback: %s",
                key,
                err,
            )
            return fallback

        if value is None:
            return fallback
        return value

    async def async_set(self, key: str, value: Any) -> None:
        """Serialize ``value`` to JSON and store it under ``key``.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            TypeError: Logged when value contains non-serializable types.
            ValueError: Logged when value cannot be encoded (e.g. circular references).
            OSError: Logged when file system issues prevent saving.
        """
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Storage - Failed to save key '%s' due to non-serializable data: %s",
                key,
                err,
            )
            return
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Storage - Failed to save key '%s' due to invalid data format: %s",
                key,
                err,
            )
            return

        try:
            await self._backend.async_set_item(self._namespaced(key), raw)
            const.LOGGER.debug("DEBUG: Storage - Saved key '%s'", key)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Storage - Failed to save key '%s' due to file system error: %s",
                key,
                err,
            )

    async def async_remove(self, key: str) -> None:
        """Remove ``key``; removing a missing key is not an error."""
        try:
            await self._backend.async_remove_item(self._namespaced(key))
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Storage - Failed to remove key '%s': %s", key, err
            )
