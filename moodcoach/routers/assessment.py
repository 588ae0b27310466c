"""
FastAPI router for personality assessment endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from common.utils import success_response
from moodcoach.config import settings
from moodcoach.dependencies import CurrentUserId, TraitServiceDep
from moodcoach.schemas.assessment import TipiSubmitRequest
from moodcoach.types import TipiResponse
from moodcoach.pipelines import assessment as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessment", tags=["assessment"])


@router.get("/questions")
async def get_questions(
    locale: Optional[str] = Query(None, description="en, vi or ja"),
):
    """TIPI questionnaire. Public; unsupported locales fall back to the default language."""
    return success_response(pipelines.get_questions_pipeline(settings.resolve_language(locale)))


@router.post("/tipi")
async def submit_tipi(
    body: TipiSubmitRequest,
    user_id: CurrentUserId,
    trait_service: TraitServiceDep,
):
    """
    Submit TIPI answers.

    Returns 422 with every validation error when the answers are incomplete,
    duplicated or out of range.
    """
    responses = [TipiResponse(question_id=r.questionId, score=r.score) for r in body.responses]

    result = await pipelines.submit_tipi_pipeline(
        trait_service=trait_service,
        user_id=user_id,
        responses=responses,
    )

    return success_response(result, message="Assessment saved")


@router.get("/results")
async def get_results(
    user_id: CurrentUserId,
    trait_service: TraitServiceDep,
):
    """Latest assessment results, or null if none."""
    result = await pipelines.get_results_pipeline(trait_service=trait_service, user_id=user_id)
    return success_response(result)
