"""
Mood analytics engine.

Computes average mood, trend, energy distribution and streak from a list
of check-ins. Pure computation: callers fetch and pre-filter the history,
the engine only re-sorts it.
"""

import logging
from datetime import date, datetime, timezone, timedelta
from typing import Dict, List, Optional, Sequence

from moodcoach.types import CheckinRecord, MoodAnalytics, ENERGY_LEVELS
from moodcoach.utils import as_utc, round_half_up

logger = logging.getLogger(__name__)

# Empty-history averages differ per call site: dashboards show 0,
# intervention decisions assume a neutral mood.
DASHBOARD_EMPTY_AVERAGE = 0.0
NEUTRAL_MOOD = 3.0


def utc_today() -> date:
    """Current calendar date in UTC (check-in timestamps are stored in UTC)."""
    return datetime.now(timezone.utc).date()


class MoodAnalyticsEngine:
    """
    Statistics over a user's check-in history.
    Never raises for empty input; returns zeroed or neutral values instead.
    """

    MIN_CHECKINS_FOR_TREND = 4
    TREND_THRESHOLD = 0.3

    @staticmethod
    def sort_recent_first(checkins: Sequence[CheckinRecord]) -> List[CheckinRecord]:
        """Canonical history order: created_at descending."""
        return sorted(checkins, key=lambda c: as_utc(c.created_at), reverse=True)

    @classmethod
    def calculate_mood_average(
        cls,
        checkins: Sequence[CheckinRecord],
        limit: Optional[int] = None,
        default: float = DASHBOARD_EMPTY_AVERAGE
    ) -> float:
        """
        Mean mood score rounded to one decimal.

        Args:
            checkins: Check-ins in any order
            limit: Only consider the N most recent check-ins
            default: Value returned for an empty history

        Returns:
            Average mood (1.0-5.0) or `default`
        """
        if not checkins:
            return default

        recent = cls.sort_recent_first(checkins)
        if limit is not None:
            recent = recent[:limit]

        total = sum(c.mood_score for c in recent)
        return round_half_up(total / len(recent), 1)

    @classmethod
    def calculate_mood_trend(cls, checkins: Sequence[CheckinRecord]) -> str:
        """
        Compare the recent half of the history against the older half.

        Algorithm:
            1. Fewer than 4 check-ins -> "stable"
            2. Sort most recent first, split at floor(n/2)
               (odd lengths give the extra record to the older half)
            3. difference = mean(recent) - mean(older)
            4. > 0.3 improving, < -0.3 declining, otherwise stable
        """
        if len(checkins) < cls.MIN_CHECKINS_FOR_TREND:
            return "stable"

        ordered = cls.sort_recent_first(checkins)
        mid = len(ordered) // 2
        recent_half = ordered[:mid]
        older_half = ordered[mid:]

        recent_avg = sum(c.mood_score for c in recent_half) / len(recent_half)
        older_avg = sum(c.mood_score for c in older_half) / len(older_half)

        difference = recent_avg - older_avg

        if difference > cls.TREND_THRESHOLD:
            return "improving"
        if difference < -cls.TREND_THRESHOLD:
            return "declining"
        return "stable"

    @staticmethod
    def calculate_energy_distribution(checkins: Sequence[CheckinRecord]) -> Dict[str, int]:
        """
        Percentage of check-ins per energy level.

        Each bucket is rounded independently, so the sum may be 99 or 101.
        """
        counts = {level: 0 for level in ENERGY_LEVELS}
        if not checkins:
            return counts

        for checkin in checkins:
            if checkin.energy_level in counts:
                counts[checkin.energy_level] += 1
            else:
                logger.warning(f"Ignoring unknown energy level: {checkin.energy_level}")

        total = len(checkins)
        return {
            level: int(round_half_up(count / total * 100))
            for level, count in counts.items()
        }

    @classmethod
    def calculate_streak_days(
        cls,
        checkins: Sequence[CheckinRecord],
        today: Optional[date] = None
    ) -> int:
        """
        Count consecutive check-in days ending today or yesterday.

        Algorithm:
            1. Sort check-ins most recent first
            2. If the most recent is not today or yesterday, return 0
            3. Walk backwards one day at a time until the first gap

        Several check-ins on the same day count as one day.
        """
        if not checkins:
            return 0

        today = today or utc_today()
        yesterday = today - timedelta(days=1)

        ordered = cls.sort_recent_first(checkins)
        current_day = ordered[0].day

        if current_day != today and current_day != yesterday:
            return 0

        streak = 1
        for checkin in ordered[1:]:
            checkin_day = checkin.day
            if checkin_day == current_day:
                continue
            if checkin_day == current_day - timedelta(days=1):
                streak += 1
                current_day = checkin_day
            else:
                break

        return streak

    @classmethod
    def generate(
        cls,
        checkins: Sequence[CheckinRecord],
        today: Optional[date] = None,
        empty_average: float = DASHBOARD_EMPTY_AVERAGE
    ) -> MoodAnalytics:
        """
        Compute the full analytics summary.

        Args:
            checkins: Check-ins for one user, any order
            today: Reference date for the streak (default: UTC today)
            empty_average: Average reported when there are no check-ins

        Returns:
            MoodAnalytics
        """
        return MoodAnalytics(
            average_mood=cls.calculate_mood_average(checkins, default=empty_average),
            mood_trend=cls.calculate_mood_trend(checkins),
            energy_distribution=cls.calculate_energy_distribution(checkins),
            total_checkins=len(checkins),
            streak_days=cls.calculate_streak_days(checkins, today=today),
        )


def generate_mood_analytics(
    checkins: Sequence[CheckinRecord],
    today: Optional[date] = None,
    empty_average: float = DASHBOARD_EMPTY_AVERAGE
) -> MoodAnalytics:
    """Module-level shortcut for MoodAnalyticsEngine.generate."""
    return MoodAnalyticsEngine.generate(checkins, today=today, empty_average=empty_average)
