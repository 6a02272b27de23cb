"""Statistics Engine - Streaks and completion statistics over the completed map.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
"Today" is always passed in by the caller, so every result is deterministic.

Streak rule:
    Walk backward one calendar day at a time counting days with at least one
    completion. Today counts only if it already has a completion; an empty
    today does not break a chain that ended yesterday. The first empty day
    before that ends the streak.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..utils import dt_utils

if TYPE_CHECKING:
    from datetime import date

    from ..type_defs import CompletedMap, DailyStats, DashboardSummary


class StatisticsEngine:
    """Pure logic engine for streak and completion-rate calculations."""

    @staticmethod
    def completed_on(completed_map: CompletedMap, day_iso: str) -> list[str]:
        """Return the mission ids completed on ``day_iso`` (empty if none)."""
        entries = completed_map.get(day_iso)
        return list(entries) if isinstance(entries, list) else []

    @staticmethod
    def calculate_streak_days(
        completed_map: CompletedMap,
        today: date,
    ) -> int:
        """Count consecutive days with a completion, ending today or yesterday.

        Args:
            completed_map: Mission ids completed per ISO date
            today: The local date considered "today"

        Returns:
            Number of consecutive days with at least one completion
        """
        cursor = today
        if not StatisticsEngine.completed_on(completed_map, cursor.isoformat()):
            cursor = dt_utils.dt_shift_days(cursor, -1)

        streak = 0
        while StatisticsEngine.completed_on(completed_map, cursor.isoformat()):
            streak += 1
            cursor = dt_utils.dt_shift_days(cursor, -1)
        return streak

    @staticmethod
    def completion_rate(completed_count: int, total_missions: int) -> int:
        """Return completed/total as a whole percent (0 when there are no missions)."""
        if total_missions <= 0:
            return 0
        return round(completed_count / total_missions * 100)

    @staticmethod
    def calculate_daily_stats(
        completed_map: CompletedMap,
        today: date,
        total_missions: int,
        days: int = const.DEFAULT_WEEKLY_STATS_DAYS,
    ) -> list[DailyStats]:
        """Return per-day completion stats for the last ``days`` days, oldest first."""
        stats: list[DailyStats] = []
        for day_iso in dt_utils.dt_last_n_days(days, today):
            completed = len(StatisticsEngine.completed_on(completed_map, day_iso))
            stats.append(
                {
                    "date": day_iso,
                    "completed_count": completed,
                    "total_missions": total_missions,
                    "rate": StatisticsEngine.completion_rate(completed, total_missions),
                }
            )
        return stats

    @staticmethod
    def build_dashboard_summary(
        completed_map: CompletedMap,
        today: date,
        total_missions: int,
        total_stars: int,
    ) -> DashboardSummary:
        """Assemble today's progress, the weekly chart and the streak in one record."""
        weekly = StatisticsEngine.calculate_daily_stats(
            completed_map, today, total_missions
        )
        today_completed = len(
            StatisticsEngine.completed_on(completed_map, today.isoformat())
        )
        weekly_average = (
            round(sum(day["rate"] for day in weekly) / len(weekly)) if weekly else 0
        )
        return {
            "today_completed": today_completed,
            "today_total": total_missions,
            "today_rate": StatisticsEngine.completion_rate(
                today_completed, total_missions
            ),
            "weekly_stats": weekly,
            "weekly_average_rate": weekly_average,
            "total_stars": total_stars,
            "streak_days": StatisticsEngine.calculate_streak_days(completed_map, today),
        }
