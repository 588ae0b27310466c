"""
History pipeline functions.

Builds the combined check-in / intervention timeline. Everything in the
date range is merged before the page is cut, so `total` counts the whole
merged timeline.
"""

import logging
from typing import Dict, Any, List, Optional

from common.utils.exceptions import BadRequestException
from moodcoach.services.checkin.checkin_service import CheckInService
from moodcoach.services.history.timeline import (
    TIMELINE_TYPES,
    calculate_history_stats,
    date_range_start,
    format_intervention,
    merge_timeline,
)
from moodcoach.services.intervention.intervention_service import InterventionService

logger = logging.getLogger(__name__)


async def get_history_pipeline(
    checkin_service: CheckInService,
    intervention_service: InterventionService,
    user_id: str,
    timeline_type: str = "all",
    date_range: str = "month",
    mood_min: Optional[int] = None,
    mood_max: Optional[int] = None,
    template_types: Optional[List[str]] = None,
    limit: int = 20,
    offset: int = 0,
    include_stats: bool = True
) -> Dict[str, Any]:
    """
    Get the merged timeline for a date range.

    Args:
        checkin_service: For check-in retrieval
        intervention_service: For intervention retrieval
        user_id: Current user's ID
        timeline_type: all, checkins or interventions
        date_range: week, month, quarter or all
        mood_min: Optional lower mood bound
        mood_max: Optional upper mood bound
        template_types: Optional intervention template filter
        limit: Page size
        offset: Items to skip
        include_stats: Whether to compute history stats

    Returns:
        dict with timeline, stats and total

    Raises:
        BadRequestException: Unknown type or date range, inverted mood bounds
    """
    if timeline_type not in TIMELINE_TYPES:
        raise BadRequestException(message=f"Invalid type: {timeline_type}", code="INVALID_FILTER")

    try:
        since = date_range_start(date_range)
    except ValueError as e:
        raise BadRequestException(message=str(e), code="INVALID_FILTER")

    if mood_min is not None and mood_max is not None and mood_min > mood_max:
        raise BadRequestException(message="moodMin cannot exceed moodMax", code="INVALID_FILTER")

    checkins = []
    if timeline_type in ("all", "checkins"):
        checkins = await checkin_service.get_all_checkins(
            user_id, since=since, mood_min=mood_min, mood_max=mood_max
        )

    interventions = []
    if timeline_type in ("all", "interventions"):
        docs = await intervention_service.get_all_interventions(
            user_id, since=since, template_types=template_types
        )
        interventions = [format_intervention(doc) for doc in docs]

    timeline = merge_timeline(checkins, interventions)

    stats = None
    if include_stats:
        # Stats cover every check-in in the date range, ignoring mood filters
        if timeline_type != "interventions" and mood_min is None and mood_max is None:
            stats_checkins = checkins
        else:
            stats_checkins = await checkin_service.get_all_checkins(user_id, since=since)
        stats = calculate_history_stats(stats_checkins, len(checkins), len(interventions))

    return {
        "timeline": timeline[offset:offset + limit],
        "stats": stats,
        "total": len(timeline),
    }
