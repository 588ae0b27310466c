"""
FastAPI router for check-in endpoints.

Provides endpoints for check-in submission, listing and analytics.
"""

import logging

from fastapi import APIRouter, Query

from common.utils import success_response, offset_paginated_response
from moodcoach.config import settings
from moodcoach.dependencies import (
    CurrentUserId,
    CheckInServiceDep,
    TraitServiceDep,
    InterventionServiceDep,
    MessageComposerDep,
)
from moodcoach.schemas.checkin import CheckInRequest, CheckInResponse, MoodAnalyticsResponse
from moodcoach.pipelines import checkin as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkins", tags=["checkins"])


@router.post("")
async def submit_checkin(
    body: CheckInRequest,
    user_id: CurrentUserId,
    checkin_service: CheckInServiceDep,
    trait_service: TraitServiceDep,
    intervention_service: InterventionServiceDep,
    message_composer: MessageComposerDep,
):
    """
    Submit a check-in.

    Stores the check-in, returns analytics over the recent history and,
    when the policy calls for one, a coaching intervention.
    """
    result = await pipelines.submit_checkin_pipeline(
        checkin_service=checkin_service,
        trait_service=trait_service,
        intervention_service=intervention_service,
        message_composer=message_composer,
        user_id=user_id,
        mood_score=body.moodScore,
        energy_level=body.energyLevel,
        free_text=body.freeText,
        recent_window=settings.RECENT_CHECKIN_WINDOW,
    )

    return success_response(result, message="Check-in saved")


@router.get("")
async def list_checkins(
    user_id: CurrentUserId,
    checkin_service: CheckInServiceDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    includeAnalytics: bool = Query(False),
):
    """Get check-ins, newest first."""
    result = await pipelines.list_checkins_pipeline(
        checkin_service=checkin_service,
        user_id=user_id,
        limit=limit,
        offset=offset,
        include_analytics=includeAnalytics,
    )

    items = [CheckInResponse(**c).model_dump() for c in result["checkins"]]
    extra = {"analytics": result["analytics"]} if includeAnalytics else None

    return offset_paginated_response(items, result["total"], limit, offset, extra=extra)


@router.get("/analytics")
async def get_analytics(
    user_id: CurrentUserId,
    checkin_service: CheckInServiceDep,
):
    """Mood analytics over the configured lookback window."""
    analytics = await pipelines.get_analytics_pipeline(
        checkin_service=checkin_service,
        user_id=user_id,
        lookback_days=settings.ANALYTICS_LOOKBACK_DAYS,
    )

    return success_response(MoodAnalyticsResponse(**analytics).model_dump())
