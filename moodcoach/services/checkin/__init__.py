"""Check-in services."""

from moodcoach.services.checkin.checkin_validator import CheckinValidator
from moodcoach.services.checkin.checkin_service import CheckInService
from moodcoach.services.checkin.mood_analytics import (
    MoodAnalyticsEngine,
    generate_mood_analytics,
    NEUTRAL_MOOD,
)

__all__ = [
    "CheckinValidator",
    "CheckInService",
    "MoodAnalyticsEngine",
    "generate_mood_analytics",
    "NEUTRAL_MOOD",
]
