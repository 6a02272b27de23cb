# File: const.py
"""Constants for the Habit Fairy integration.

This file centralizes storage keys, data field names, defaults, service names,
rejection reasons, and platform identifiers for consistency across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Domain
DOMAIN = "habitfairy"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "habitfairy_data"
STORAGE_VERSION = 1

# Every key written through the persistence adapter is namespaced with this prefix
STORAGE_PREFIX = "habit-fairy:"

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONFIG_FLOW_STEP_USER = "user"

CONF_CHILD_NAME = "child_name"
CONF_CHARACTER = "character"
CONF_PET_TYPE = "pet_type"

# ------------------------------------------------------------------------------------------------
# Persisted Slices
# ------------------------------------------------------------------------------------------------
SLICE_MISSIONS = "missions"
SLICE_COMPLETED = "completed_missions"
SLICE_ECONOMY = "economy"
SLICE_PET = "pet"
SLICE_PROFILE = "profile"

ALL_SLICES = (
    SLICE_MISSIONS,
    SLICE_COMPLETED,
    SLICE_ECONOMY,
    SLICE_PET,
    SLICE_PROFILE,
)

# ------------------------------------------------------------------------------------------------
# Data Keys
# ------------------------------------------------------------------------------------------------
# Missions slice
DATA_CUSTOM_MISSIONS = "custom_missions"
DATA_PRESET_OVERRIDES = "preset_overrides"

# Economy slice
DATA_TOTAL_STARS = "total_stars"
DATA_OWNED_ITEMS = "owned_items"
DATA_EQUIPPED_ITEMS = "equipped_items"
DATA_STAR_LEDGER = "star_ledger"

# Profile slice
DATA_CHILD_NAME = "child_name"
DATA_SELECTED_CHARACTER = "selected_character"

# Mission fields
DATA_MISSION_ID = "id"
DATA_MISSION_NAME = "name"
DATA_MISSION_DESCRIPTION = "description"
DATA_MISSION_ICON = "icon"
DATA_MISSION_CATEGORY = "category"
DATA_MISSION_TIMER_SECONDS = "timer_seconds"
DATA_MISSION_STAR_REWARD = "star_reward"
DATA_MISSION_FAIRY_MESSAGE_START = "fairy_message_start"
DATA_MISSION_FAIRY_MESSAGE_COMPLETE = "fairy_message_complete"
DATA_MISSION_IS_PRESET = "is_preset"
DATA_MISSION_IS_ACTIVE = "is_active"
DATA_MISSION_SORT_ORDER = "sort_order"

# Fields a caller may change through an update
MISSION_EDITABLE_FIELDS = frozenset(
    {
        DATA_MISSION_NAME,
        DATA_MISSION_DESCRIPTION,
        DATA_MISSION_ICON,
        DATA_MISSION_CATEGORY,
        DATA_MISSION_TIMER_SECONDS,
        DATA_MISSION_STAR_REWARD,
        DATA_MISSION_FAIRY_MESSAGE_START,
        DATA_MISSION_FAIRY_MESSAGE_COMPLETE,
        DATA_MISSION_IS_ACTIVE,
    }
)

# Pet fields
DATA_PET_TYPE = "type"
DATA_PET_STAGE = "stage"
DATA_PET_EXP = "exp"
DATA_PET_LAST_INTERACTION = "last_interaction"
DATA_PET_CREATED_AT = "created_at"

# Ledger fields
DATA_LEDGER_TIMESTAMP = "timestamp"
DATA_LEDGER_AMOUNT = "amount"
DATA_LEDGER_BALANCE_AFTER = "balance_after"
DATA_LEDGER_SOURCE = "source"
DATA_LEDGER_REFERENCE_ID = "reference_id"

# Ledger sources
STARS_SOURCE_MISSION = "mission"
STARS_SOURCE_PURCHASE = "purchase"

# ------------------------------------------------------------------------------------------------
# Mission Categories
# ------------------------------------------------------------------------------------------------
MISSION_CATEGORY_MORNING = "morning"
MISSION_CATEGORY_DAYTIME = "daytime"
MISSION_CATEGORY_EVENING = "evening"
MISSION_CATEGORY_STUDY = "study"
MISSION_CATEGORY_HEALTH = "health"

MISSION_ID_CUSTOM_PREFIX = "custom-"

REORDER_UP = "up"
REORDER_DOWN = "down"

# ------------------------------------------------------------------------------------------------
# Pets and Characters
# ------------------------------------------------------------------------------------------------
PET_TYPE_FAIRY = "fairy"
PET_TYPE_DINO = "dino"
PET_TYPE_ROBOT = "robot"

PET_STAGE_EGG = "egg"
PET_STAGE_BABY = "baby"
PET_STAGE_ADULT = "adult"

# Experience granted per star earned from a mission
PET_EXP_PER_STAR = 10

# Experience granted per direct interaction with the pet
PET_EXP_PER_INTERACTION = 1

CHARACTER_CATEGORY_BOY = "boy"
CHARACTER_CATEGORY_GIRL = "girl"

# ------------------------------------------------------------------------------------------------
# Items
# ------------------------------------------------------------------------------------------------
ITEM_CATEGORY_HAT = "hat"
ITEM_CATEGORY_WING = "wing"
ITEM_CATEGORY_BACKGROUND = "background"
ITEM_CATEGORY_ACCESSORY = "accessory"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_ZERO = 0
DEFAULT_CHARACTER_ID = "dino"
DEFAULT_PET_TYPE = PET_TYPE_FAIRY
DEFAULT_PET_STAGE = 1
DEFAULT_MISSION_ICON = "⭐"
DEFAULT_MISSION_STAR_REWARD = 1
DEFAULT_MISSION_CATEGORY = MISSION_CATEGORY_MORNING
DEFAULT_MISSION_NAME = "New mission"
DEFAULT_FAIRY_MESSAGE_START = "Shall we start? 💪"
DEFAULT_FAIRY_MESSAGE_COMPLETE = "Well done! ⭐"
DEFAULT_WEEKLY_STATS_DAYS = 7
DEFAULT_MAX_LEDGER_ENTRIES = 50
DEFAULT_DAILY_ROLLOVER_TIME = {"hour": 0, "minute": 0, "second": 0}

# ------------------------------------------------------------------------------------------------
# Mutation Rejection Reasons
# ------------------------------------------------------------------------------------------------
REASON_ALREADY_COMPLETED = "already_completed"
REASON_INSUFFICIENT_STARS = "insufficient_stars"
REASON_ALREADY_OWNED = "already_owned"
REASON_NOT_OWNED = "not_owned"
REASON_WRONG_CATEGORY = "wrong_category"
REASON_INVALID_COST = "invalid_cost"
REASON_INVALID_STAR_REWARD = "invalid_star_reward"
REASON_INVALID_TIMER = "invalid_timer"
REASON_INVALID_CATEGORY = "invalid_category"
REASON_UNKNOWN_MISSION = "unknown_mission"
REASON_PRESET_MISSION = "preset_mission"
REASON_CANNOT_MOVE = "cannot_move"
REASON_UNKNOWN_CHARACTER = "unknown_character"
REASON_UNKNOWN_PET_TYPE = "unknown_pet_type"
REASON_EMPTY_NAME = "empty_name"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_ADD_CUSTOM_MISSION = "add_custom_mission"
SERVICE_CHANGE_PET_TYPE = "change_pet_type"
SERVICE_COMPLETE_MISSION = "complete_mission"
SERVICE_DELETE_CUSTOM_MISSION = "delete_custom_mission"
SERVICE_INTERACT_WITH_PET = "interact_with_pet"
SERVICE_PURCHASE_ITEM = "purchase_item"
SERVICE_RELOAD_DATA = "reload_data"
SERVICE_REORDER_MISSION = "reorder_mission"
SERVICE_RESET_ALL_DATA = "reset_all_data"
SERVICE_SELECT_CHARACTER = "select_character"
SERVICE_SET_CHILD_NAME = "set_child_name"
SERVICE_TOGGLE_EQUIP_ITEM = "toggle_equip_item"
SERVICE_TOGGLE_MISSION = "toggle_mission"
SERVICE_UPDATE_MISSION = "update_mission"

FIELD_CATEGORY = "category"
FIELD_CHARACTER_ID = "character_id"
FIELD_COST = "cost"
FIELD_DESCRIPTION = "description"
FIELD_DIRECTION = "direction"
FIELD_FAIRY_MESSAGE_COMPLETE = "fairy_message_complete"
FIELD_FAIRY_MESSAGE_START = "fairy_message_start"
FIELD_ICON = "icon"
FIELD_IS_ACTIVE = "is_active"
FIELD_ITEM_ID = "item_id"
FIELD_MISSION_ID = "mission_id"
FIELD_NAME = "name"
FIELD_PET_TYPE = "pet_type"
FIELD_STAR_REWARD = "star_reward"
FIELD_TIMER_SECONDS = "timer_seconds"

RESPONSE_APPLIED = "applied"
RESPONSE_REASON = "reason"
RESPONSE_MISSION_ID = "mission_id"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_TOTAL_STARS = "_total_stars"
SENSOR_UID_SUFFIX_STREAK_DAYS = "_streak_days"
SENSOR_UID_SUFFIX_TODAY_COMPLETED = "_today_completed"
SENSOR_UID_SUFFIX_PET_STAGE = "_pet_stage"

TRANS_KEY_SENSOR_TOTAL_STARS = "total_stars"
TRANS_KEY_SENSOR_STREAK_DAYS = "streak_days"
TRANS_KEY_SENSOR_TODAY_COMPLETED = "today_completed"
TRANS_KEY_SENSOR_PET_STAGE = "pet_stage"

ATTR_CHILD_NAME = "child_name"
ATTR_COMPLETED_MISSIONS = "completed_missions"
ATTR_DIALOGUE = "dialogue"
ATTR_EQUIPPED_ITEMS = "equipped_items"
ATTR_EXP = "exp"
ATTR_EXP_PROGRESS = "exp_progress"
ATTR_LAST_7_DAYS = "last_7_days"
ATTR_OWNED_ITEMS = "owned_items"
ATTR_PET_TYPE = "pet_type"
ATTR_SELECTED_CHARACTER = "selected_character"
ATTR_STAGE = "stage"
ATTR_STAGE_DISPLAY_NAME = "stage_display_name"
ATTR_TODAY_TOTAL = "today_total"

LABEL_STARS = "stars"
LABEL_DAYS = "days"

INTEGRATION_TITLE = "Habit Fairy"
DEVICE_MANUFACTURER = "Habit Fairy"
DEVICE_MODEL = "Child Progress"

ATTR_WEEKLY_AVERAGE_RATE = "weekly_average_rate"
ATTR_TODAY_RATE = "today_rate"
ATTR_STAR_LEDGER = "star_ledger"
ATTR_SHOP_ITEMS = "shop_items"

# ------------------------------------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------------------------------------
TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_CFOF_INVALID_CHILD_NAME = "invalid_child_name"
ERROR_NOT_LOADED = "Habit Fairy integration is not loaded"
