"""
History timeline and statistics.

Merges check-ins and interventions into a single timeline and computes
summary statistics for the history views.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from moodcoach.services.checkin.mood_analytics import MoodAnalyticsEngine
from moodcoach.types import CheckinRecord
from moodcoach.utils import as_utc, round_half_up

DATE_RANGES = {
    "week": 7,
    "month": 30,
    "quarter": 90,
    "all": None,
}

TIMELINE_TYPES = ("all", "checkins", "interventions")


def date_range_start(date_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Start of a named date range.

    Returns:
        Lower createdAt bound, or None for "all"

    Raises:
        ValueError: Unknown range name
    """
    if date_range not in DATE_RANGES:
        raise ValueError(f"Invalid date range: {date_range}")

    days = DATE_RANGES[date_range]
    if days is None:
        return None

    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=days)


def format_intervention(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Intervention document to API shape."""
    return {
        "id": str(doc["_id"]),
        "checkinId": str(doc["checkinId"]) if doc.get("checkinId") else None,
        "templateType": doc.get("templateType"),
        "messagePayload": doc.get("messagePayload"),
        "fallback": doc.get("fallback", True),
        "source": doc.get("source"),
        "viewed": doc.get("viewed", False),
        "feedbackScore": doc.get("feedbackScore"),
        "feedbackAt": doc.get("feedbackAt"),
        "createdAt": doc.get("createdAt"),
    }


def merge_timeline(
    checkins: Sequence[CheckinRecord],
    interventions: Sequence[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """
    Merge check-ins and interventions into one timeline, newest first.

    Check-ins with interventions become "grouped" items, other check-ins
    "checkin" items, and interventions whose check-in is not in the list
    "intervention" items.

    Args:
        checkins: Check-in records
        interventions: Interventions in format_intervention shape

    Returns:
        List of {id, type, date, data}
    """
    by_checkin: Dict[str, List[Dict[str, Any]]] = {}
    for intervention in interventions:
        by_checkin.setdefault(intervention.get("checkinId") or "", []).append(intervention)

    timeline: List[Dict[str, Any]] = []

    for checkin in checkins:
        related = by_checkin.pop(checkin.id, [])
        if related:
            timeline.append({
                "id": f"grouped-{checkin.id}",
                "type": "grouped",
                "date": checkin.created_at,
                "data": {"checkin": checkin.to_dict(), "interventions": related},
            })
        else:
            timeline.append({
                "id": f"checkin-{checkin.id}",
                "type": "checkin",
                "date": checkin.created_at,
                "data": checkin.to_dict(),
            })

    for orphans in by_checkin.values():
        for intervention in orphans:
            timeline.append({
                "id": f"intervention-{intervention['id']}",
                "type": "intervention",
                "date": intervention["createdAt"],
                "data": intervention,
            })

    timeline.sort(key=lambda item: as_utc(item["date"]), reverse=True)
    return timeline


def calculate_history_stats(
    checkins: Sequence[CheckinRecord],
    total_checkins: int,
    total_interventions: int,
    today: Optional[date] = None,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Summary statistics for the history view.

    Args:
        checkins: All check-ins within the selected date range
        total_checkins: Check-in count after filters
        total_interventions: Intervention count after filters
        today: Reference date for the streak
        now: Used as the date range when there are no check-ins

    Returns:
        Stats dict (camelCase keys)
    """
    analytics = MoodAnalyticsEngine.generate(checkins, today=today)

    if checkins:
        ordered = MoodAnalyticsEngine.sort_recent_first(checkins)
        date_from, date_to = ordered[-1].created_at, ordered[0].created_at
    else:
        date_from = date_to = now or datetime.now(timezone.utc)

    return {
        "totalCheckins": total_checkins,
        "totalInterventions": total_interventions,
        "avgMoodScore": analytics.average_mood,
        "energyDistribution": analytics.energy_distribution,
        "streakDays": analytics.streak_days,
        "moodTrend": analytics.mood_trend,
        "dateRange": {"from": date_from, "to": date_to},
    }


def calculate_intervention_stats(
    interventions: Sequence[Dict[str, Any]],
    total: int,
    average_feedback: Optional[float]
) -> Dict[str, Any]:
    """
    Statistics over a page of interventions.

    Args:
        interventions: Interventions in format_intervention shape
        total: Total interventions for the user
        average_feedback: Mean feedback across all rated interventions

    Returns:
        Stats dict
    """
    return {
        "totalInterventions": total,
        "withFeedback": sum(1 for i in interventions if i.get("feedbackScore") is not None),
        "aiGenerated": sum(1 for i in interventions if not i.get("fallback")),
        "templateGenerated": sum(1 for i in interventions if i.get("fallback")),
        "avgFeedbackScore": round_half_up(average_feedback, 1) if average_feedback is not None else None,
    }
