"""
Intervention pipeline functions.
"""

import logging
from typing import Dict, Any

from common.utils.exceptions import NotFoundException
from moodcoach.services.history.timeline import calculate_intervention_stats, format_intervention
from moodcoach.services.intervention.intervention_service import InterventionService

logger = logging.getLogger(__name__)


async def list_interventions_pipeline(
    intervention_service: InterventionService,
    user_id: str,
    limit: int = 20,
    offset: int = 0,
    include_stats: bool = False
) -> Dict[str, Any]:
    """
    Get paginated interventions, newest first.

    Returns:
        dict with interventions, total and stats (or None)
    """
    docs = await intervention_service.list_interventions(user_id, limit=limit, offset=offset)
    total = await intervention_service.count(user_id)
    interventions = [format_intervention(doc) for doc in docs]

    stats = None
    if include_stats and interventions:
        average = await intervention_service.average_feedback(user_id)
        stats = calculate_intervention_stats(interventions, total, average)

    return {
        "interventions": interventions,
        "total": total,
        "stats": stats,
    }


async def submit_feedback_pipeline(
    intervention_service: InterventionService,
    user_id: str,
    intervention_id: str,
    score: int
) -> Dict[str, Any]:
    """
    Record feedback on an intervention.

    Raises:
        NotFoundException: Intervention missing or owned by another user
    """
    doc = await intervention_service.update_feedback(intervention_id, user_id, score)
    if not doc:
        raise NotFoundException(message="Intervention not found", code="INTERVENTION_NOT_FOUND")

    return format_intervention(doc)


async def mark_viewed_pipeline(
    intervention_service: InterventionService,
    user_id: str,
    intervention_id: str
) -> Dict[str, Any]:
    """
    Mark an intervention as viewed.

    Raises:
        NotFoundException: Intervention missing or owned by another user
    """
    doc = await intervention_service.mark_viewed(intervention_id, user_id)
    if not doc:
        raise NotFoundException(message="Intervention not found", code="INTERVENTION_NOT_FOUND")

    return format_intervention(doc)
