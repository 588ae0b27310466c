"""
FastAPI router for the history timeline.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from common.utils import offset_paginated_response
from moodcoach.dependencies import CurrentUserId, CheckInServiceDep, InterventionServiceDep
from moodcoach.pipelines import history as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def get_history(
    user_id: CurrentUserId,
    checkin_service: CheckInServiceDep,
    intervention_service: InterventionServiceDep,
    type: str = Query("all", description="all, checkins or interventions"),
    dateRange: str = Query("month", description="week, month, quarter or all"),
    moodMin: Optional[int] = Query(None, ge=1, le=5),
    moodMax: Optional[int] = Query(None, ge=1, le=5),
    templateTypes: Optional[str] = Query(None, description="Comma-separated template types"),
    includeStats: bool = Query(True),
    limit: int = Query(20, ge=1, le=50),
    offset: int = Query(0, ge=0),
):
    """
    Combined timeline of check-ins and interventions.

    Check-ins with interventions are grouped into a single item.
    """
    template_types = [t.strip() for t in templateTypes.split(",") if t.strip()] if templateTypes else None

    result = await pipelines.get_history_pipeline(
        checkin_service=checkin_service,
        intervention_service=intervention_service,
        user_id=user_id,
        timeline_type=type,
        date_range=dateRange,
        mood_min=moodMin,
        mood_max=moodMax,
        template_types=template_types,
        limit=limit,
        offset=offset,
        include_stats=includeStats,
    )

    return offset_paginated_response(
        result["timeline"], result["total"], limit, offset,
        extra={"stats": result["stats"]},
    )
