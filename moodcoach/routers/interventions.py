"""
FastAPI router for intervention endpoints.
"""

import logging

from fastapi import APIRouter, Query

from common.utils import success_response, offset_paginated_response
from moodcoach.dependencies import CurrentUserId, InterventionServiceDep
from moodcoach.schemas.intervention import FeedbackRequest
from moodcoach.pipelines import intervention as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interventions", tags=["interventions"])


@router.get("")
async def list_interventions(
    user_id: CurrentUserId,
    intervention_service: InterventionServiceDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    includeStats: bool = Query(False),
):
    """Get interventions, newest first."""
    result = await pipelines.list_interventions_pipeline(
        intervention_service=intervention_service,
        user_id=user_id,
        limit=limit,
        offset=offset,
        include_stats=includeStats,
    )

    extra = {"stats": result["stats"]} if result["stats"] else None
    return offset_paginated_response(result["interventions"], result["total"], limit, offset, extra=extra)


@router.post("/{intervention_id}/feedback")
async def submit_feedback(
    intervention_id: str,
    body: FeedbackRequest,
    user_id: CurrentUserId,
    intervention_service: InterventionServiceDep,
):
    """Rate an intervention (1-5)."""
    result = await pipelines.submit_feedback_pipeline(
        intervention_service=intervention_service,
        user_id=user_id,
        intervention_id=intervention_id,
        score=body.score,
    )

    return success_response(result, message="Feedback recorded")


@router.post("/{intervention_id}/viewed")
async def mark_viewed(
    intervention_id: str,
    user_id: CurrentUserId,
    intervention_service: InterventionServiceDep,
):
    """Mark an intervention as viewed."""
    result = await pipelines.mark_viewed_pipeline(
        intervention_service=intervention_service,
        user_id=user_id,
        intervention_id=intervention_id,
    )

    return success_response(result)
