"""Mission Engine - Preset catalog, categories, and mission list logic.

This engine provides stateless, pure Python functions for:
- The fixed catalog of 10 preset missions
- Category taxonomy (labels and canonical ordering)
- Lookup and grouping of missions
- Merging presets, preset overrides and custom missions into one sorted view
- Building, validating and reordering custom missions

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State management belongs in HabitFairyCoordinator.
"""

from __future__ import annotations

import copy
import random
import string
import time
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import MissionCategory, MissionData, PresetOverrides


def _preset(
    mission_id: str,
    name: str,
    description: str,
    icon: str,
    category: MissionCategory,
    timer_seconds: int,
    star_reward: int,
    fairy_message_start: str,
    fairy_message_complete: str,
    sort_order: int,
) -> MissionData:
    return {
        const.DATA_MISSION_ID: mission_id,
        const.DATA_MISSION_NAME: name,
        const.DATA_MISSION_DESCRIPTION: description,
        const.DATA_MISSION_ICON: icon,
        const.DATA_MISSION_CATEGORY: category,
        const.DATA_MISSION_TIMER_SECONDS: timer_seconds,
        const.DATA_MISSION_STAR_REWARD: star_reward,
        const.DATA_MISSION_FAIRY_MESSAGE_START: fairy_message_start,
        const.DATA_MISSION_FAIRY_MESSAGE_COMPLETE: fairy_message_complete,
        const.DATA_MISSION_IS_PRESET: True,
        const.DATA_MISSION_IS_ACTIVE: True,
        const.DATA_MISSION_SORT_ORDER: sort_order,
    }


PRESET_MISSIONS: tuple[MissionData, ...] = (
    _preset(
        "mission-brush-teeth",
        "Brush teeth",
        "Scrub up and down, every tooth!",
        "🪥",
        const.MISSION_CATEGORY_MORNING,
        180,
        2,
        "Time to make your teeth sparkle!",
        "Wow, your teeth are so clean!",
        0,
    ),
    _preset(
        "mission-wash-face",
        "Wash face",
        "Splash some water for a fresh face!",
        "🧼",
        const.MISSION_CATEGORY_MORNING,
        60,
        1,
        "Shall we wash your face?",
        "What a clean, shiny face!",
        1,
    ),
    _preset(
        "mission-wash-hands",
        "Wash hands",
        "Lots of soap bubbles!",
        "🫧",
        const.MISSION_CATEGORY_DAYTIME,
        30,
        1,
        "Let's chase the germs away!",
        "All the germs ran away!",
        2,
    ),
    _preset(
        "mission-dress-up",
        "Get dressed",
        "Put on today's clothes by yourself",
        "👕",
        const.MISSION_CATEGORY_MORNING,
        300,
        2,
        "Can you dress up all by yourself?",
        "You got dressed on your own, amazing!",
        3,
    ),
    _preset(
        "mission-shoes",
        "Put on shoes",
        "Left and right on the right feet!",
        "👟",
        const.MISSION_CATEGORY_MORNING,
        120,
        1,
        "Let's put on your shoes!",
        "Left and right, perfect!",
        4,
    ),
    _preset(
        "mission-greet",
        "Say hello",
        "A big bright hello!",
        "👋",
        const.MISSION_CATEGORY_MORNING,
        0,
        1,
        "Shall we say hello to someone today?",
        "What a wonderful greeting!",
        5,
    ),
    _preset(
        "mission-eat",
        "Eat a meal",
        "A little bit of everything, yum!",
        "🍚",
        const.MISSION_CATEGORY_DAYTIME,
        0,
        3,
        "Let's eat a bit of everything!",
        "You ate it all, great job!",
        6,
    ),
    _preset(
        "mission-tidy-toys",
        "Tidy toys",
        "Put the toys back where they live!",
        "🧸",
        const.MISSION_CATEGORY_DAYTIME,
        300,
        2,
        "The toys want to go home!",
        "Wow, the room is so tidy!",
        7,
    ),
    _preset(
        "mission-read-book",
        "Read a book",
        "Read one picture book",
        "📚",
        const.MISSION_CATEGORY_DAYTIME,
        600,
        3,
        "What story shall we read today?",
        "You read a whole book, fantastic!",
        8,
    ),
    _preset(
        "mission-bedtime",
        "Get ready for bed",
        "Brush, pajamas, and off to bed!",
        "🌙",
        const.MISSION_CATEGORY_EVENING,
        0,
        2,
        "Great day! Let's get ready for bed.",
        "I'll be waiting for you tomorrow. Sleep tight!",
        9,
    ),
)

CATEGORY_ORDER: tuple[MissionCategory, ...] = (
    const.MISSION_CATEGORY_MORNING,
    const.MISSION_CATEGORY_DAYTIME,
    const.MISSION_CATEGORY_EVENING,
    const.MISSION_CATEGORY_STUDY,
    const.MISSION_CATEGORY_HEALTH,
)

CATEGORY_LABELS: dict[MissionCategory, str] = {
    const.MISSION_CATEGORY_MORNING: "🌅 Morning routine",
    const.MISSION_CATEGORY_DAYTIME: "☀️ Daytime",
    const.MISSION_CATEGORY_EVENING: "🌙 Evening routine",
    const.MISSION_CATEGORY_STUDY: "📖 Study",
    const.MISSION_CATEGORY_HEALTH: "💪 Health",
}

_PRESET_IDS = frozenset(m[const.DATA_MISSION_ID] for m in PRESET_MISSIONS)


class MissionEngine:
    """Pure logic engine for mission lookup, grouping and list maintenance.

    All methods are static - no instance state.
    """

    @staticmethod
    def is_preset_id(mission_id: str | None) -> bool:
        """Return True if ``mission_id`` names a preset mission."""
        return mission_id in _PRESET_IDS

    @staticmethod
    def get_mission_by_id(
        mission_id: str | None,
        custom_missions: Iterable[MissionData] | None = None,
    ) -> MissionData | None:
        """Find a mission by id, searching presets first and then ``custom_missions``.

        Returns None for a None id or an id that matches nothing. Never raises.
        """
        if mission_id is None:
            return None
        for mission in PRESET_MISSIONS:
            if mission[const.DATA_MISSION_ID] == mission_id:
                return mission
        for mission in custom_missions or ():
            if isinstance(mission, dict) and mission.get(const.DATA_MISSION_ID) == mission_id:
                return mission
        return None

    @staticmethod
    def group_missions_by_category(
        missions: Any,
    ) -> dict[MissionCategory, list[MissionData]]:
        """Group missions by category, keeping input order within each group.

        Every category in CATEGORY_ORDER is present even when empty. Input that
        is not a list or tuple yields all-empty groups; entries with an unknown
        category are left out.
        """
        groups: dict[MissionCategory, list[MissionData]] = {
            category: [] for category in CATEGORY_ORDER
        }
        if not isinstance(missions, (list, tuple)):
            return groups
        for mission in missions:
            if not isinstance(mission, dict):
                continue
            category = mission.get(const.DATA_MISSION_CATEGORY)
            if category in groups:
                groups[category].append(mission)
        return groups

    @staticmethod
    def sort_missions(missions: Iterable[MissionData]) -> list[MissionData]:
        """Return missions ordered by sort_order (stable for ties)."""
        return sorted(
            missions,
            key=lambda m: m.get(const.DATA_MISSION_SORT_ORDER, const.DEFAULT_ZERO),
        )

    @staticmethod
    def merge_missions(
        custom_missions: Iterable[MissionData],
        preset_overrides: PresetOverrides | None = None,
        include_inactive: bool = False,
    ) -> list[MissionData]:
        """Build the combined mission view.

        Presets are copied with their overrides applied (overrides never touch
        the id or preset flag), custom missions are appended, and the result is
        sorted by sort_order. Inactive missions are dropped unless requested.
        """
        overrides = preset_overrides or {}
        merged: list[MissionData] = []
        for preset in PRESET_MISSIONS:
            mission = copy.deepcopy(preset)
            override = overrides.get(preset[const.DATA_MISSION_ID]) or {}
            for field, value in override.items():
                if field in (const.DATA_MISSION_ID, const.DATA_MISSION_IS_PRESET):
                    continue
                mission[field] = value  # type: ignore[literal-required]
            merged.append(mission)
        merged.extend(copy.deepcopy(list(custom_missions)))

        if not include_inactive:
            merged = [m for m in merged if m.get(const.DATA_MISSION_IS_ACTIVE, True)]
        return MissionEngine.sort_missions(merged)

    @staticmethod
    def sanitize_update(fields: dict[str, Any]) -> dict[str, Any]:
        """Return only the editable fields of a mission update.

        ``id``, ``is_preset`` and ``sort_order`` are always dropped, as are keys
        that are not mission fields at all.
        """
        return {
            field: value
            for field, value in fields.items()
            if field in const.MISSION_EDITABLE_FIELDS
        }

    @staticmethod
    def validate_mission_fields(fields: dict[str, Any]) -> str | None:
        """Check the value ranges of mission fields that are present.

        Returns:
            A rejection reason constant, or None when everything is valid.
        """
        if const.DATA_MISSION_CATEGORY in fields and (
            fields[const.DATA_MISSION_CATEGORY] not in CATEGORY_ORDER
        ):
            return const.REASON_INVALID_CATEGORY

        if const.DATA_MISSION_STAR_REWARD in fields:
            reward = fields[const.DATA_MISSION_STAR_REWARD]
            if isinstance(reward, bool) or not isinstance(reward, int) or reward <= 0:
                return const.REASON_INVALID_STAR_REWARD

        if const.DATA_MISSION_TIMER_SECONDS in fields:
            timer = fields[const.DATA_MISSION_TIMER_SECONDS]
            if isinstance(timer, bool) or not isinstance(timer, int) or timer < 0:
                return const.REASON_INVALID_TIMER

        return None

    @staticmethod
    def generate_custom_id(existing_ids: Iterable[str] = ()) -> str:
        """Generate a ``custom-<epoch ms>-<5 chars>`` id not in ``existing_ids``."""
        taken = set(existing_ids) | _PRESET_IDS
        alphabet = string.ascii_lowercase + string.digits
        while True:
            suffix = "".join(random.choices(alphabet, k=5))
            candidate = (
                f"{const.MISSION_ID_CUSTOM_PREFIX}{int(time.time() * 1000)}-{suffix}"
            )
            if candidate not in taken:
                return candidate

    @staticmethod
    def build_custom_mission(
        fields: dict[str, Any], existing_missions: Iterable[MissionData]
    ) -> MissionData:
        """Create a new custom mission from user-supplied fields.

        Omitted fields get defaults; the id is generated, ``is_preset`` is False
        and ``sort_order`` lands after every existing mission.
        """
        existing = list(existing_missions)
        editable = MissionEngine.sanitize_update(fields)
        next_order = (
            max(
                (m.get(const.DATA_MISSION_SORT_ORDER, 0) for m in existing),
                default=len(PRESET_MISSIONS) - 1,
            )
            + 1
        )
        return {
            const.DATA_MISSION_ID: MissionEngine.generate_custom_id(
                m.get(const.DATA_MISSION_ID, "") for m in existing
            ),
            const.DATA_MISSION_NAME: editable.get(
                const.DATA_MISSION_NAME, const.DEFAULT_MISSION_NAME
            ),
            const.DATA_MISSION_DESCRIPTION: editable.get(
                const.DATA_MISSION_DESCRIPTION, ""
            ),
            const.DATA_MISSION_ICON: editable.get(
                const.DATA_MISSION_ICON, const.DEFAULT_MISSION_ICON
            ),
            const.DATA_MISSION_CATEGORY: editable.get(
                const.DATA_MISSION_CATEGORY, const.DEFAULT_MISSION_CATEGORY
            ),
            const.DATA_MISSION_TIMER_SECONDS: editable.get(
                const.DATA_MISSION_TIMER_SECONDS, const.DEFAULT_ZERO
            ),
            const.DATA_MISSION_STAR_REWARD: editable.get(
                const.DATA_MISSION_STAR_REWARD, const.DEFAULT_MISSION_STAR_REWARD
            ),
            const.DATA_MISSION_FAIRY_MESSAGE_START: editable.get(
                const.DATA_MISSION_FAIRY_MESSAGE_START,
                const.DEFAULT_FAIRY_MESSAGE_START,
            ),
            const.DATA_MISSION_FAIRY_MESSAGE_COMPLETE: editable.get(
                const.DATA_MISSION_FAIRY_MESSAGE_COMPLETE,
                const.DEFAULT_FAIRY_MESSAGE_COMPLETE,
            ),
            const.DATA_MISSION_IS_PRESET: False,
            const.DATA_MISSION_IS_ACTIVE: editable.get(
                const.DATA_MISSION_IS_ACTIVE, True
            ),
            const.DATA_MISSION_SORT_ORDER: next_order,
        }

    @staticmethod
    def calculate_reorder(
        missions: Iterable[MissionData], mission_id: str, direction: str
    ) -> dict[str, int]:
        """Plan a one-step move of ``mission_id`` within the sorted mission list.

        The mission swaps sort_order with its neighbour in ``direction``
        (``up`` = earlier, ``down`` = later).

        Returns:
            ``{mission_id: new_sort_order}`` for the two swapped missions, or an
            empty dict if the mission is unknown or already at that boundary.
        """
        ordered = MissionEngine.sort_missions(missions)
        index = next(
            (
                i
                for i, m in enumerate(ordered)
                if m.get(const.DATA_MISSION_ID) == mission_id
            ),
            None,
        )
        if index is None:
            return {}

        if direction == const.REORDER_UP:
            neighbour_index = index - 1
        elif direction == const.REORDER_DOWN:
            neighbour_index = index + 1
        else:
            return {}
        if neighbour_index < 0 or neighbour_index >= len(ordered):
            return {}

        current = ordered[index]
        neighbour = ordered[neighbour_index]
        current_order = current.get(const.DATA_MISSION_SORT_ORDER, index)
        neighbour_order = neighbour.get(const.DATA_MISSION_SORT_ORDER, neighbour_index)
        if current_order == neighbour_order:
            # Duplicate orders would make the swap a no-op; fall back to positions
            current_order, neighbour_order = index, neighbour_index
        return {
            current[const.DATA_MISSION_ID]: neighbour_order,
            neighbour[const.DATA_MISSION_ID]: current_order,
        }
