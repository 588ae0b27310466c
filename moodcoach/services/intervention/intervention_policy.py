"""
Intervention policy.

Decides whether a check-in warrants a coaching message, which template
to use, and how urgent it is.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from moodcoach.services.checkin.mood_analytics import MoodAnalyticsEngine, NEUTRAL_MOOD
from moodcoach.types import BigFiveScores, CheckinRecord, InterventionContext
from moodcoach.utils import as_utc

logger = logging.getLogger(__name__)

COMPASSION_MAX_MOOD = 2.5
REFLECTION_MAX_MOOD = 3.5
ENGAGED_CHECKIN_COUNT = 3
LOW_MOOD_THRESHOLD = 2.0
DECLINING_MOOD_THRESHOLD = 3.0


def should_generate_intervention(
    recent_checkins: Sequence[CheckinRecord],
    last_intervention_time: Optional[datetime] = None,
    now: Optional[datetime] = None
) -> bool:
    """
    Decide whether the latest check-in should trigger an intervention.

    Rules, first match wins:
        - no check-ins: no
        - an intervention was already generated today (UTC): no
        - engaged user (3+ recent check-ins): yes
        - average mood <= 2: yes
        - declining trend with average mood <= 3: yes
        - otherwise: no
    """
    if not recent_checkins:
        return False

    if last_intervention_time is not None:
        now = as_utc(now or datetime.now(timezone.utc))
        if as_utc(last_intervention_time).date() == now.date():
            logger.debug("Intervention already generated today, skipping")
            return False

    if len(recent_checkins) >= ENGAGED_CHECKIN_COUNT:
        return True

    average = MoodAnalyticsEngine.calculate_mood_average(recent_checkins)
    if average <= LOW_MOOD_THRESHOLD:
        return True

    trend = MoodAnalyticsEngine.calculate_mood_trend(recent_checkins)
    if trend == "declining" and average <= DECLINING_MOOD_THRESHOLD:
        return True

    return False


def select_intervention_template(mood_average: float) -> str:
    """Map an average mood to compassion, reflection or action."""
    if mood_average <= COMPASSION_MAX_MOOD:
        return "compassion"
    if mood_average <= REFLECTION_MAX_MOOD:
        return "reflection"
    return "action"


def calculate_intervention_priority(context: InterventionContext) -> int:
    """
    Additive urgency score; higher means more urgent.

    Scoring:
        mood average <= 2 / <= 2.5 / <= 3: +10 / +7 / +4
        trend declining / improving: +5 / +2
        recent check-ins >= 7 / >= 3: +3 / +2
        streak >= 7 days: +2
        low energy with mood average <= 3: +3
    """
    priority = 0

    if context.mood_average <= 2:
        priority += 10
    elif context.mood_average <= 2.5:
        priority += 7
    elif context.mood_average <= 3:
        priority += 4

    if context.mood_trend == "declining":
        priority += 5
    elif context.mood_trend == "improving":
        priority += 2

    if context.recent_checkins >= 7:
        priority += 3
    elif context.recent_checkins >= 3:
        priority += 2

    if context.streak_days >= 7:
        priority += 2

    if context.energy_level == "low" and context.mood_average <= 3:
        priority += 3

    return priority


def rank_interventions(contexts: Sequence[InterventionContext]) -> List[InterventionContext]:
    """Order candidate contexts by priority, most urgent first (stable for ties)."""
    return sorted(contexts, key=calculate_intervention_priority, reverse=True)


def build_intervention_context(
    recent_checkins: Sequence[CheckinRecord],
    current_checkin: CheckinRecord,
    personality_traits: Optional[BigFiveScores] = None,
    today: Optional[date] = None
) -> InterventionContext:
    """
    Build the context for template selection and message composition.

    Args:
        recent_checkins: Recent history including the current check-in
        current_checkin: The check-in that triggered the intervention
        personality_traits: Latest p01 trait scores, if assessed
        today: Reference date for the streak (default: UTC today)

    Returns:
        InterventionContext (average defaults to neutral 3 for empty history)
    """
    analytics = MoodAnalyticsEngine.generate(
        recent_checkins, today=today, empty_average=NEUTRAL_MOOD
    )

    return InterventionContext(
        mood_average=analytics.average_mood,
        mood_trend=analytics.mood_trend,
        energy_level=current_checkin.energy_level,
        recent_checkins=analytics.total_checkins,
        streak_days=analytics.streak_days,
        free_text=current_checkin.free_text,
        personality_traits=personality_traits,
    )
