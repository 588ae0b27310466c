"""
Check-in pipeline functions.

Stateless orchestration logic for check-in operations.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, Any

from moodcoach.services.assessment.trait_service import TraitService
from moodcoach.services.checkin.checkin_service import CheckInService
from moodcoach.services.checkin.mood_analytics import generate_mood_analytics
from moodcoach.services.intervention.intervention_policy import (
    build_intervention_context,
    calculate_intervention_priority,
    select_intervention_template,
    should_generate_intervention,
)
from moodcoach.services.intervention.intervention_service import InterventionService
from moodcoach.services.intervention.message_composer import MessageComposer
from moodcoach.services.intervention.orchestrator_client import build_orchestrator_payload
from moodcoach.types import CheckinRecord

logger = logging.getLogger(__name__)


async def submit_checkin_pipeline(
    checkin_service: CheckInService,
    trait_service: TraitService,
    intervention_service: InterventionService,
    message_composer: MessageComposer,
    user_id: str,
    mood_score: int,
    energy_level: str,
    free_text: Optional[str] = None,
    recent_window: int = 7
) -> Dict[str, Any]:
    """
    Orchestrates the check-in submission flow.

    Steps:
        1. Store the check-in
        2. Analyze the recent history (including this check-in)
        3. Ask the policy whether an intervention is due
        4. Compose and store the intervention

    Steps 2-4 never fail the submission; errors are logged and the
    check-in is returned without an intervention.

    Args:
        checkin_service: For check-in persistence
        trait_service: For personality traits
        intervention_service: For intervention persistence
        message_composer: Orchestrator / AI / template cascade
        user_id: Current user's ID
        mood_score: Mood 1-5
        energy_level: low, mid or high
        free_text: Optional note
        recent_window: Number of recent check-ins to analyze

    Returns:
        Response dict with checkin, analytics and intervention (or None)
    """
    checkin = await checkin_service.submit_checkin(user_id, mood_score, energy_level, free_text)

    recent = await checkin_service.get_recent_checkins(user_id, limit=recent_window)
    if not any(c.id == checkin.id for c in recent):
        recent = [checkin] + recent[:recent_window - 1]

    analytics = generate_mood_analytics(recent)

    intervention = None
    try:
        intervention = await _generate_intervention(
            trait_service=trait_service,
            intervention_service=intervention_service,
            message_composer=message_composer,
            user_id=user_id,
            checkin=checkin,
            recent=recent,
        )
    except Exception as e:
        # Don't fail check-in if intervention generation fails
        logger.error(f"Intervention generation failed for check-in {checkin.id}: {e}")

    return {
        "checkin": checkin.to_dict(),
        "analytics": analytics.to_dict(),
        "intervention": intervention,
    }


async def _generate_intervention(
    trait_service: TraitService,
    intervention_service: InterventionService,
    message_composer: MessageComposer,
    user_id: str,
    checkin: CheckinRecord,
    recent: list
) -> Optional[Dict[str, Any]]:
    last_time = await intervention_service.get_last_intervention_time(user_id)
    if not should_generate_intervention(recent, last_intervention_time=last_time):
        logger.debug(f"No intervention due for user {user_id}")
        return None

    traits = await trait_service.get_latest_traits(user_id)
    context = build_intervention_context(recent, checkin, personality_traits=traits)
    template = select_intervention_template(context.mood_average)

    payload = build_orchestrator_payload(
        user_id=user_id,
        checkin=checkin,
        context=context,
        history_refs=[c.id for c in recent],
    )
    result = await message_composer.compose(template, context, orchestrator_payload=payload)

    doc = await intervention_service.save_intervention(user_id, checkin.id, result)

    return {
        "id": str(doc["_id"]),
        "templateType": result.template,
        "message": result.message.to_dict(),
        "fallback": result.fallback,
        "source": result.source,
        "priority": calculate_intervention_priority(context),
    }


async def list_checkins_pipeline(
    checkin_service: CheckInService,
    user_id: str,
    limit: int = 20,
    offset: int = 0,
    include_analytics: bool = False
) -> Dict[str, Any]:
    """
    Get paginated check-ins, optionally with analytics over the page.

    Returns:
        dict with checkins, total and analytics (or None)
    """
    checkins = await checkin_service.get_history(user_id, limit=limit, offset=offset)
    total = await checkin_service.get_total_count(user_id)

    analytics = None
    if include_analytics:
        analytics = generate_mood_analytics(checkins).to_dict()

    return {
        "checkins": [c.to_dict() for c in checkins],
        "total": total,
        "analytics": analytics,
    }


async def get_analytics_pipeline(
    checkin_service: CheckInService,
    user_id: str,
    lookback_days: int = 30
) -> Dict[str, Any]:
    """
    Dashboard analytics over the last N days.

    Returns:
        MoodAnalytics dict (average 0 when there are no check-ins)
    """
    since = datetime.now(timezone.utc) - timedelta(days=lookback_days)
    checkins = await checkin_service.get_all_checkins(user_id, since=since)

    return generate_mood_analytics(checkins).to_dict()
