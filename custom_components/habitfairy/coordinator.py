# File: coordinator.py
"""Coordinator for the Habit Fairy integration.

Holds the authoritative in-memory snapshot of one child's progress: missions,
daily completions, stars, owned and equipped items, the pet and the profile.

Every mutation runs synchronously on the event loop, updates memory first, then
schedules a fire-and-forget save of the slices it touched and pushes the new
snapshot to listening entities. Reads issued after a mutation returns always see
its effect, even before the save finishes; ``async_flush`` waits for pending saves.

Rejected mutations (unaffordable purchase, deleting a preset, equipping an
unowned item, ...) change nothing and return ``MutationResult.rejected(reason)``.
"""

# pylint: disable=too-many-public-methods

from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.event import async_track_time_change
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from .engines import EconomyEngine, MissionEngine, PetEngine, StatisticsEngine
from .utils import dt_utils

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .engines import PetGrowthEffect
    from .storage_manager import HabitFairyStorage
    from .type_defs import (
        CompletedMap,
        DailyStats,
        DashboardSummary,
        EquippedItems,
        LedgerEntry,
        MissionData,
        PetStateData,
        PresetOverrides,
    )


def _is_int(value: Any) -> bool:
    """Return True for real ints (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a coordinator mutation.

    Attributes:
        applied: True if state changed and a save was scheduled
        reason: Rejection reason constant when not applied
        data: Extra details for callers (new mission id, evolution flag, ...)
    """

    applied: bool
    reason: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, **data: Any) -> MutationResult:
        """Build an applied result."""
        return cls(applied=True, data=data)

    @classmethod
    def rejected(cls, reason: str) -> MutationResult:
        """Build a rejected result."""
        return cls(applied=False, reason=reason)


class HabitFairyCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for the Habit Fairy integration.

    Created once per config entry. Nothing polls: ``update_interval`` is None
    and a refresh simply re-reads storage.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry | None,
        storage: HabitFairyStorage,
    ) -> None:
        """Initialize the HabitFairyCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.storage = storage
        self._pending_saves: set[asyncio.Task[None]] = set()
        self._is_loaded = False
        self._first_run = False
        self._apply_defaults()

    # -------------------------------------------------------------------------------------
    # Defaults and Loading
    # -------------------------------------------------------------------------------------

    def _apply_defaults(self) -> None:
        """Reset every slice to its first-run value."""
        self._custom_missions: list[MissionData] = []
        self._preset_overrides: PresetOverrides = {}
        self._completed_map: CompletedMap = {}
        self._total_stars: int = const.DEFAULT_ZERO
        self._owned_items: list[str] = []
        self._equipped_items: EquippedItems = {}
        self._star_ledger: list[LedgerEntry] = []
        self._child_name: str | None = None
        self._selected_character: str = const.DEFAULT_CHARACTER_ID
        self._pet: PetStateData = PetEngine.build_default_state(
            const.DEFAULT_PET_TYPE, dt_utils.dt_now_iso()
        )
        self._all_missions: list[MissionData] = []
        self._missions: list[MissionData] = []
        self._rebuild_mission_views()

    async def _async_update_data(self) -> dict[str, Any]:
        """Re-read storage; used by the first refresh and by async_refresh."""
        await self._async_read_all()
        return self._snapshot()

    async def async_load_data(self) -> None:
        """Load every persisted slice and replace the in-memory state.

        Safe to call repeatedly: each call re-reads storage and overwrites what
        is in memory with what was loaded.
        """
        await self._async_read_all()
        self.async_set_updated_data(self._snapshot())

    async def _async_read_all(self) -> None:
        """Read all slices with first-run fallbacks and normalise them."""
        const.LOGGER.debug("DEBUG: Coordinator - Loading all slices from storage")
        missions_raw = await self.storage.async_get(const.SLICE_MISSIONS, {})
        completed_raw = await self.storage.async_get(const.SLICE_COMPLETED, {})
        economy_raw = await self.storage.async_get(const.SLICE_ECONOMY, {})
        pet_raw = await self.storage.async_get(const.SLICE_PET, {})
        profile_raw = await self.storage.async_get(const.SLICE_PROFILE, None)

        self._apply_defaults()
        self._first_run = profile_raw is None
        self._load_missions_slice(missions_raw)
        self._load_completed_slice(completed_raw)
        self._load_economy_slice(economy_raw)
        self._load_pet_slice(pet_raw)
        self._load_profile_slice(profile_raw or {})
        self._rebuild_mission_views()
        self._is_loaded = True

        const.LOGGER.debug(
            "DEBUG: Coordinator - Loaded data: %s",
            {
                "custom_missions": len(self._custom_missions),
                "completed_days": len(self._completed_map),
                "total_stars": self._total_stars,
                "owned_items": len(self._owned_items),
                "pet_stage": self._pet[const.DATA_PET_STAGE],
                "first_run": self._first_run,
            },
        )

    def _load_missions_slice(self, raw: Any) -> None:
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Missions data has unexpected type %s, using defaults",
                type(raw).__name__,
            )
            return

        customs: list[MissionData] = []
        seen_ids: set[str] = set()
        stored_customs = raw.get(const.DATA_CUSTOM_MISSIONS)
        if not isinstance(stored_customs, list):
            stored_customs = []
        for mission in stored_customs:
            mission_id = (
                mission.get(const.DATA_MISSION_ID) if isinstance(mission, dict) else None
            )
            if (
                not isinstance(mission_id, str)
                or mission_id in seen_ids
                or MissionEngine.is_preset_id(mission_id)
            ):
                const.LOGGER.warning(
                    "WARNING: Skipping invalid stored custom mission: %s", mission
                )
                continue
            seen_ids.add(mission_id)
            mission[const.DATA_MISSION_IS_PRESET] = False
            mission.setdefault(const.DATA_MISSION_IS_ACTIVE, True)
            customs.append(mission)

        overrides = raw.get(const.DATA_PRESET_OVERRIDES) or {}
        if isinstance(overrides, dict):
            self._preset_overrides = {
                mission_id: {
                    field: value
                    for field, value in values.items()
                    if field != const.DATA_MISSION_SORT_ORDER or _is_int(value)
                }
                for mission_id, values in overrides.items()
                if MissionEngine.is_preset_id(mission_id) and isinstance(values, dict)
            }

        # Missions with an unusable sort_order go after every ordered mission
        ordered = [m for m in customs if _is_int(m.get(const.DATA_MISSION_SORT_ORDER))]
        unordered = [m for m in customs if m not in ordered]
        next_order = 1 + max(
            (
                m[const.DATA_MISSION_SORT_ORDER]
                for m in MissionEngine.merge_missions(
                    ordered, self._preset_overrides, include_inactive=True
                )
            ),
            default=const.DEFAULT_ZERO,
        )
        for offset, mission in enumerate(unordered):
            const.LOGGER.warning(
                "WARNING: Custom mission '%s' has invalid sort order %r, moving it last",
                mission[const.DATA_MISSION_ID],
                mission.get(const.DATA_MISSION_SORT_ORDER),
            )
            mission[const.DATA_MISSION_SORT_ORDER] = next_order + offset
        self._custom_missions = customs

    def _load_completed_slice(self, raw: Any) -> None:
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Completed missions data has unexpected type %s, using defaults",
                type(raw).__name__,
            )
            return

        completed: CompletedMap = {}
        for day_key, mission_ids in raw.items():
            day = dt_utils.dt_parse_date(day_key)
            if day is None or not isinstance(mission_ids, list):
                continue
            # Keys are stored as plain YYYY-MM-DD; other ISO spellings merge into it
            day_iso = day.isoformat()
            merged = completed.get(day_iso, []) + [
                mission_id for mission_id in mission_ids if isinstance(mission_id, str)
            ]
            # Keep first occurrence only; a mission counts once per day
            completed[day_iso] = list(dict.fromkeys(merged))
        self._completed_map = completed

    def _load_economy_slice(self, raw: Any) -> None:
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Economy data has unexpected type %s, using defaults",
                type(raw).__name__,
            )
            return

        stars = raw.get(const.DATA_TOTAL_STARS, const.DEFAULT_ZERO)
        if not _is_int(stars) or stars < 0:
            stars = const.DEFAULT_ZERO
        self._total_stars = stars
        owned = raw.get(const.DATA_OWNED_ITEMS)
        if not isinstance(owned, list):
            owned = []
        self._owned_items = list(dict.fromkeys(i for i in owned if isinstance(i, str)))
        equipped = raw.get(const.DATA_EQUIPPED_ITEMS) or {}
        if isinstance(equipped, dict):
            # Equipped items must always be owned
            self._equipped_items = {
                category: item_id
                for category, item_id in equipped.items()
                if item_id in self._owned_items
            }
        ledger = raw.get(const.DATA_STAR_LEDGER) or []
        if isinstance(ledger, list):
            self._star_ledger = [entry for entry in ledger if isinstance(entry, dict)]

    def _load_pet_slice(self, raw: Any) -> None:
        if not isinstance(raw, dict) or not raw:
            return

        pet_type = raw.get(const.DATA_PET_TYPE)
        if not PetEngine.is_valid_type(pet_type):
            const.LOGGER.warning(
                "WARNING: Stored pet type '%s' is unknown, starting a new %s",
                pet_type,
                const.DEFAULT_PET_TYPE,
            )
            return

        max_stage = PetEngine.get_max_stage(pet_type)
        stage = raw.get(const.DATA_PET_STAGE, const.DEFAULT_PET_STAGE)
        if not _is_int(stage):
            stage = const.DEFAULT_PET_STAGE
        exp = raw.get(const.DATA_PET_EXP, const.DEFAULT_ZERO)
        if not _is_int(exp):
            exp = const.DEFAULT_ZERO

        self._pet = {
            const.DATA_PET_TYPE: pet_type,
            const.DATA_PET_STAGE: min(max(stage, 1), max_stage),
            const.DATA_PET_EXP: max(exp, 0),
            const.DATA_PET_LAST_INTERACTION: raw.get(
                const.DATA_PET_LAST_INTERACTION
            )
            or self._pet[const.DATA_PET_LAST_INTERACTION],
            const.DATA_PET_CREATED_AT: raw.get(const.DATA_PET_CREATED_AT)
            or self._pet[const.DATA_PET_CREATED_AT],
        }

    def _load_profile_slice(self, raw: Any) -> None:
        if not isinstance(raw, dict):
            return

        name = raw.get(const.DATA_CHILD_NAME)
        self._child_name = name if isinstance(name, str) and name else None
        character = raw.get(const.DATA_SELECTED_CHARACTER)
        if PetEngine.get_character_by_id(character) is not None:
            self._selected_character = character

    # -------------------------------------------------------------------------------------
    # Snapshot and Persistence
    # -------------------------------------------------------------------------------------

    def _slice_payload(self, slice_key: str) -> Any:
        """Return a detached copy of one persisted slice."""
        if slice_key == const.SLICE_MISSIONS:
            payload: Any = {
                const.DATA_CUSTOM_MISSIONS: self._custom_missions,
                const.DATA_PRESET_OVERRIDES: self._preset_overrides,
            }
        elif slice_key == const.SLICE_COMPLETED:
            payload = self._completed_map
        elif slice_key == const.SLICE_ECONOMY:
            payload = {
                const.DATA_TOTAL_STARS: self._total_stars,
                const.DATA_OWNED_ITEMS: self._owned_items,
                const.DATA_EQUIPPED_ITEMS: self._equipped_items,
                const.DATA_STAR_LEDGER: self._star_ledger,
            }
        elif slice_key == const.SLICE_PET:
            payload = self._pet
        elif slice_key == const.SLICE_PROFILE:
            payload = {
                const.DATA_CHILD_NAME: self._child_name,
                const.DATA_SELECTED_CHARACTER: self._selected_character,
            }
        else:
            raise ValueError(f"Unknown storage slice '{slice_key}'")
        return copy.deepcopy(payload)

    def _snapshot(self) -> dict[str, Any]:
        """Return the state pushed to listeners as coordinator data."""
        return {
            const.SLICE_MISSIONS: self._slice_payload(const.SLICE_MISSIONS),
            const.SLICE_COMPLETED: self._slice_payload(const.SLICE_COMPLETED),
            const.SLICE_ECONOMY: self._slice_payload(const.SLICE_ECONOMY),
            const.SLICE_PET: self._slice_payload(const.SLICE_PET),
            const.SLICE_PROFILE: self._slice_payload(const.SLICE_PROFILE),
        }

    def _persist(self, *slices: str) -> None:
        """Schedule a save of each given slice without waiting for it."""
        for slice_key in slices:
            task = self.hass.async_create_task(
                self.storage.async_set(slice_key, self._slice_payload(slice_key)),
                f"{const.DOMAIN}_save_{slice_key}",
            )
            self._pending_saves.add(task)
            task.add_done_callback(self._pending_saves.discard)

    def _persist_and_update(self, *slices: str) -> None:
        """Save the touched slices and notify listeners of the new state."""
        self._persist(*slices)
        self.async_set_updated_data(self._snapshot())

    @property
    def has_pending_saves(self) -> bool:
        """Return True while any scheduled save is still running."""
        return bool(self._pending_saves)

    async def async_flush(self) -> None:
        """Wait until every scheduled save has completed."""
        while self._pending_saves:
            await asyncio.gather(*list(self._pending_saves))

    @callback
    def async_track_day_rollover(self) -> CALLBACK_TYPE:
        """Refresh listeners at local midnight so day-based values roll over.

        Returns:
            Callable that cancels the timer.
        """
        return async_track_time_change(
            self.hass, self._on_midnight_tick, **const.DEFAULT_DAILY_ROLLOVER_TIME
        )

    @callback
    def _on_midnight_tick(self, _now: datetime) -> None:
        const.LOGGER.debug("DEBUG: Coordinator - Midnight rollover, refreshing entities")
        self.async_update_listeners()

    # -------------------------------------------------------------------------------------
    # Read-only Selectors
    # -------------------------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        """Return True once storage has been read at least once."""
        return self._is_loaded

    @property
    def is_first_run(self) -> bool:
        """Return True if the last load found no stored profile."""
        return self._first_run

    @property
    def missions(self) -> list[MissionData]:
        """Active missions (presets with overrides plus customs) in sort order."""
        return self._missions

    @property
    def all_missions(self) -> list[MissionData]:
        """All missions including inactive ones, in sort order."""
        return self._all_missions

    @property
    def custom_missions(self) -> list[MissionData]:
        """User-created missions as stored."""
        return self._custom_missions

    @property
    def preset_overrides(self) -> PresetOverrides:
        """Edits applied on top of preset missions."""
        return self._preset_overrides

    @property
    def completed_map(self) -> CompletedMap:
        """Mission ids completed per ISO date."""
        return self._completed_map

    @property
    def total_stars(self) -> int:
        """Current spendable star balance."""
        return self._total_stars

    @property
    def owned_items(self) -> list[str]:
        """Ids of purchased items."""
        return self._owned_items

    @property
    def equipped_items(self) -> EquippedItems:
        """Equipped item id per item category."""
        return self._equipped_items

    @property
    def star_ledger(self) -> list[LedgerEntry]:
        """Most recent star transactions, oldest first."""
        return self._star_ledger

    @property
    def selected_character(self) -> str:
        """Id of the selected profile character."""
        return self._selected_character

    @property
    def child_name(self) -> str | None:
        """The child's name, or None if not set."""
        return self._child_name

    @property
    def pet(self) -> PetStateData:
        """Current pet state."""
        return self._pet

    # -------------------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------------------

    def _today(self) -> date:
        """Return today's date in the Home Assistant timezone."""
        return dt_util.now().date()

    def get_today_completed(self) -> list[str]:
        """Return the mission ids completed today."""
        return StatisticsEngine.completed_on(
            self._completed_map, self._today().isoformat()
        )

    def is_mission_completed_today(self, mission_id: str) -> bool:
        """Return True if ``mission_id`` was completed today."""
        return mission_id in self.get_today_completed()

    def get_streak_days(self) -> int:
        """Return the current streak of consecutive days with a completion."""
        return StatisticsEngine.calculate_streak_days(
            self._completed_map, self._today()
        )

    def get_last_n_days(self, n: int) -> list[str]:
        """Return the last ``n`` ISO dates ending today, oldest first."""
        return dt_utils.dt_last_n_days(n, self._today())

    def get_weekly_stats(self) -> list[DailyStats]:
        """Return the last 7 days of completion statistics."""
        return StatisticsEngine.calculate_daily_stats(
            self._completed_map, self._today(), len(self._missions)
        )

    def get_dashboard_summary(self) -> DashboardSummary:
        """Return today's progress, the weekly chart, stars and streak."""
        return StatisticsEngine.build_dashboard_summary(
            self._completed_map,
            self._today(),
            len(self._missions),
            self._total_stars,
        )

    def get_missions_by_category(self) -> dict[str, list[MissionData]]:
        """Return the active missions grouped by category."""
        return MissionEngine.group_missions_by_category(self._missions)

    def get_exp_progress(self) -> float:
        """Return the pet's progress toward its next stage (0..1)."""
        return PetEngine.get_exp_progress(
            self._pet[const.DATA_PET_TYPE],
            self._pet[const.DATA_PET_STAGE],
            self._pet[const.DATA_PET_EXP],
        )

    def get_pet_dialogue(self) -> str:
        """Return a random line for the pet's current stage."""
        return PetEngine.get_random_dialogue(
            self._pet[const.DATA_PET_TYPE], self._pet[const.DATA_PET_STAGE]
        )

    # -------------------------------------------------------------------------------------
    # Missions
    # -------------------------------------------------------------------------------------

    def _rebuild_mission_views(self) -> None:
        self._all_missions = MissionEngine.merge_missions(
            self._custom_missions, self._preset_overrides, include_inactive=True
        )
        self._missions = [
            m for m in self._all_missions if m.get(const.DATA_MISSION_IS_ACTIVE, True)
        ]

    def reload_all_missions(self) -> list[MissionData]:
        """Recompute the merged mission views from presets, overrides and customs."""
        self._rebuild_mission_views()
        self.async_set_updated_data(self._snapshot())
        return self._all_missions

    def _find_custom(self, mission_id: str) -> MissionData | None:
        return next(
            (
                m
                for m in self._custom_missions
                if m.get(const.DATA_MISSION_ID) == mission_id
            ),
            None,
        )

    def _apply_mission_fields(self, mission_id: str, fields: dict[str, Any]) -> bool:
        """Write fields onto a preset (as override) or custom mission."""
        if MissionEngine.is_preset_id(mission_id):
            self._preset_overrides.setdefault(mission_id, {}).update(fields)
            return True
        mission = self._find_custom(mission_id)
        if mission is None:
            return False
        mission.update(fields)  # type: ignore[typeddict-item]
        return True

    def _current_mission(self, mission_id: str) -> MissionData | None:
        return next(
            (m for m in self._all_missions if m[const.DATA_MISSION_ID] == mission_id),
            None,
        )

    def complete_mission(self, mission_id: str, star_reward: int) -> MutationResult:
        """Record today's completion of a mission and award its stars.

        Completion is once per mission per day: repeating it changes nothing.
        Earned stars also feed the pet's exp, which may evolve it by one stage.
        """
        if (
            isinstance(star_reward, bool)
            or not isinstance(star_reward, int)
            or star_reward < 0
        ):
            const.LOGGER.warning(
                "WARNING: Complete Mission - Invalid star reward %s for mission '%s'",
                star_reward,
                mission_id,
            )
            return MutationResult.rejected(const.REASON_INVALID_STAR_REWARD)

        today_iso = self._today().isoformat()
        today_completed = self._completed_map.get(today_iso, [])
        if mission_id in today_completed:
            const.LOGGER.debug(
                "DEBUG: Complete Mission - '%s' already completed on %s",
                mission_id,
                today_iso,
            )
            return MutationResult.rejected(const.REASON_ALREADY_COMPLETED)

        self._completed_map[today_iso] = [*today_completed, mission_id]

        self._star_ledger.append(
            EconomyEngine.create_ledger_entry(
                self._total_stars, star_reward, const.STARS_SOURCE_MISSION, mission_id
            )
        )
        EconomyEngine.prune_ledger(self._star_ledger)
        self._total_stars = EconomyEngine.calculate_new_balance(
            self._total_stars, star_reward
        )

        effect = self._gain_pet_exp(star_reward * const.PET_EXP_PER_STAR)

        const.LOGGER.info(
            "INFO: Complete Mission - '%s' completed, +%s stars (total %s)",
            mission_id,
            star_reward,
            self._total_stars,
        )
        self._persist_and_update(
            const.SLICE_COMPLETED, const.SLICE_ECONOMY, const.SLICE_PET
        )
        return MutationResult.ok(
            stars_earned=star_reward,
            total_stars=self._total_stars,
            evolved=effect.evolved,
            stage=effect.stage,
        )

    def add_custom_mission(self, fields: dict[str, Any]) -> MutationResult:
        """Create a custom mission from the given fields."""
        sanitized = MissionEngine.sanitize_update(fields)
        reason = MissionEngine.validate_mission_fields(sanitized)
        if reason:
            const.LOGGER.warning(
                "WARNING: Add Mission - Rejected (%s): %s", reason, fields
            )
            return MutationResult.rejected(reason)

        mission = MissionEngine.build_custom_mission(sanitized, self._all_missions)
        self._custom_missions.append(mission)
        self._rebuild_mission_views()
        const.LOGGER.info(
            "INFO: Add Mission - Created '%s' (%s)",
            mission[const.DATA_MISSION_NAME],
            mission[const.DATA_MISSION_ID],
        )
        self._persist_and_update(const.SLICE_MISSIONS)
        return MutationResult.ok(mission_id=mission[const.DATA_MISSION_ID])

    def toggle_mission(self, mission_id: str) -> MutationResult:
        """Flip a mission between active and inactive without deleting it."""
        mission = self._current_mission(mission_id)
        if mission is None:
            return MutationResult.rejected(const.REASON_UNKNOWN_MISSION)

        is_active = not mission.get(const.DATA_MISSION_IS_ACTIVE, True)
        self._apply_mission_fields(mission_id, {const.DATA_MISSION_IS_ACTIVE: is_active})
        self._rebuild_mission_views()
        self._persist_and_update(const.SLICE_MISSIONS)
        return MutationResult.ok(is_active=is_active)

    def update_mission(self, mission_id: str, fields: dict[str, Any]) -> MutationResult:
        """Merge editable fields into a mission.

        ``id``, ``is_preset`` and ``sort_order`` are never changed here. Preset
        edits are kept as overrides so the catalog itself stays untouched.
        """
        if self._current_mission(mission_id) is None:
            return MutationResult.rejected(const.REASON_UNKNOWN_MISSION)

        sanitized = MissionEngine.sanitize_update(fields)
        ignored = sorted(set(fields) - set(sanitized))
        if ignored:
            const.LOGGER.debug(
                "DEBUG: Update Mission - Ignoring non-editable fields %s for '%s'",
                ignored,
                mission_id,
            )
        reason = MissionEngine.validate_mission_fields(sanitized)
        if reason:
            return MutationResult.rejected(reason)
        if not sanitized:
            return MutationResult.ok(changed_fields=[])

        self._apply_mission_fields(mission_id, sanitized)
        self._rebuild_mission_views()
        self._persist_and_update(const.SLICE_MISSIONS)
        return MutationResult.ok(changed_fields=sorted(sanitized))

    def delete_custom_mission(self, mission_id: str) -> MutationResult:
        """Delete a custom mission. Preset missions can only be deactivated."""
        if MissionEngine.is_preset_id(mission_id):
            const.LOGGER.warning(
                "WARNING: Delete Mission - '%s' is a preset mission and cannot be deleted",
                mission_id,
            )
            return MutationResult.rejected(const.REASON_PRESET_MISSION)

        mission = self._find_custom(mission_id)
        if mission is None:
            return MutationResult.rejected(const.REASON_UNKNOWN_MISSION)

        self._custom_missions.remove(mission)
        self._rebuild_mission_views()
        self._persist_and_update(const.SLICE_MISSIONS)
        return MutationResult.ok()

    def reorder_mission(self, mission_id: str, direction: str) -> MutationResult:
        """Move a mission one place up or down in the full mission order."""
        if self._current_mission(mission_id) is None:
            return MutationResult.rejected(const.REASON_UNKNOWN_MISSION)

        plan = MissionEngine.calculate_reorder(self._all_missions, mission_id, direction)
        if not plan:
            return MutationResult.rejected(const.REASON_CANNOT_MOVE)

        for target_id, sort_order in plan.items():
            self._apply_mission_fields(
                target_id, {const.DATA_MISSION_SORT_ORDER: sort_order}
            )
        self._rebuild_mission_views()
        self._persist_and_update(const.SLICE_MISSIONS)
        return MutationResult.ok(sort_orders=plan)

    # -------------------------------------------------------------------------------------
    # Economy
    # -------------------------------------------------------------------------------------

    def purchase_item(self, item_id: str, cost: int) -> MutationResult:
        """Buy an item if it is affordable and not already owned."""
        if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
            return MutationResult.rejected(const.REASON_INVALID_COST)
        if item_id in self._owned_items:
            return MutationResult.rejected(const.REASON_ALREADY_OWNED)
        if not EconomyEngine.validate_sufficient_funds(self._total_stars, cost):
            const.LOGGER.debug(
                "DEBUG: Purchase - '%s' costs %s but balance is %s",
                item_id,
                cost,
                self._total_stars,
            )
            return MutationResult.rejected(const.REASON_INSUFFICIENT_STARS)

        self._star_ledger.append(
            EconomyEngine.create_ledger_entry(
                self._total_stars, -cost, const.STARS_SOURCE_PURCHASE, item_id
            )
        )
        EconomyEngine.prune_ledger(self._star_ledger)
        self._total_stars = EconomyEngine.calculate_new_balance(self._total_stars, -cost)
        self._owned_items.append(item_id)

        const.LOGGER.info(
            "INFO: Purchase - Bought '%s' for %s stars (balance %s)",
            item_id,
            cost,
            self._total_stars,
        )
        self._persist_and_update(const.SLICE_ECONOMY)
        return MutationResult.ok(total_stars=self._total_stars)

    def toggle_equip_item(self, item_id: str, category: str) -> MutationResult:
        """Equip an owned item in its category, or unequip it if already equipped."""
        if item_id not in self._owned_items:
            return MutationResult.rejected(const.REASON_NOT_OWNED)
        # Items outside the shop catalog may go in any slot
        item = EconomyEngine.get_item_by_id(item_id)
        if item is not None and item["category"] != category:
            return MutationResult.rejected(const.REASON_WRONG_CATEGORY)

        self._equipped_items, equipped = EconomyEngine.toggle_equipped(
            self._equipped_items, item_id, category
        )
        self._persist_and_update(const.SLICE_ECONOMY)
        return MutationResult.ok(equipped=equipped)

    # -------------------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------------------

    def select_character(self, character_id: str) -> MutationResult:
        """Choose the profile character."""
        if PetEngine.get_character_by_id(character_id) is None:
            return MutationResult.rejected(const.REASON_UNKNOWN_CHARACTER)

        self._selected_character = character_id
        self._persist_and_update(const.SLICE_PROFILE)
        return MutationResult.ok()

    def set_child_name(self, name: str) -> MutationResult:
        """Set the child's display name."""
        cleaned = name.strip() if isinstance(name, str) else ""
        if not cleaned:
            return MutationResult.rejected(const.REASON_EMPTY_NAME)

        self._child_name = cleaned
        self._persist_and_update(const.SLICE_PROFILE)
        return MutationResult.ok()

    # -------------------------------------------------------------------------------------
    # Pet
    # -------------------------------------------------------------------------------------

    def _gain_pet_exp(self, amount: int) -> PetGrowthEffect:
        """Add exp to the pet and evaluate evolution once."""
        effect = PetEngine.apply_exp(self._pet, amount)
        self._pet[const.DATA_PET_STAGE] = effect.stage
        self._pet[const.DATA_PET_EXP] = effect.exp
        self._pet[const.DATA_PET_LAST_INTERACTION] = dt_utils.dt_now_iso()
        if effect.evolved:
            const.LOGGER.info(
                "INFO: Pet - %s evolved from stage %s to %s",
                self._pet[const.DATA_PET_TYPE],
                effect.previous_stage,
                effect.stage,
            )
        return effect

    def interact_with_pet(self) -> MutationResult:
        """Give the pet a little exp for a tap or cuddle."""
        effect = self._gain_pet_exp(const.PET_EXP_PER_INTERACTION)
        self._persist_and_update(const.SLICE_PET)
        return MutationResult.ok(evolved=effect.evolved, stage=effect.stage)

    def change_pet_type(self, pet_type: str) -> MutationResult:
        """Start over with a new stage-1 pet of ``pet_type``."""
        if not PetEngine.is_valid_type(pet_type):
            return MutationResult.rejected(const.REASON_UNKNOWN_PET_TYPE)

        self._pet = PetEngine.build_default_state(pet_type, dt_utils.dt_now_iso())
        self._persist_and_update(const.SLICE_PET)
        return MutationResult.ok()

    def reset_pet(self) -> MutationResult:
        """Start over with a new stage-1 pet of the current type."""
        return self.change_pet_type(self._pet[const.DATA_PET_TYPE])

    # -------------------------------------------------------------------------------------
    # Data Reset
    # -------------------------------------------------------------------------------------

    async def async_reset_all_data(self) -> None:
        """Delete every persisted slice and reload first-run defaults."""
        const.LOGGER.warning("WARNING: Clearing all Habit Fairy data")
        await self.async_flush()
        for slice_key in const.ALL_SLICES:
            await self.storage.async_remove(slice_key)
        await self.async_load_data()


__all__ = ["HabitFairyCoordinator", "MutationResult"]
