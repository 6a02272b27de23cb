# File: utils/dt_utils.py
"""Date and time utilities for Habit Fairy.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Uses the standard library datetime module, and dateutil for parsing and
calendar arithmetic.

Functions:
    - dt_now_iso: Get current datetime as ISO string
    - dt_parse_date: Parse date strings into date objects
    - dt_shift_days: Move a date by a number of days
    - dt_last_n_days: Oldest-first list of the last N ISO dates ending today
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO string."""
    return datetime.now(UTC).isoformat()


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Parse a date-like input into a ``date``.

    Accepts ``date``/``datetime`` objects and ISO 8601 strings with or without a
    time part. Returns None for empty or unparsable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError) as err:
        _LOGGER.debug("DEBUG: Could not parse date '%s': %s", value, err)
        return None


def dt_shift_days(value: date, days: int) -> date:
    """Return ``value`` moved by ``days`` calendar days (negative goes back)."""
    return value + relativedelta(days=days)


def dt_last_n_days(n: int, today: date) -> list[str]:
    """Return the last ``n`` calendar days ending with ``today``, oldest first.

    Examples:
        dt_last_n_days(3, date(2026, 1, 2)) → ["2025-12-31", "2026-01-01", "2026-01-02"]
    """
    if n <= 0:
        return []
    return [dt_shift_days(today, -offset).isoformat() for offset in range(n - 1, -1, -1)]
