"""
Assessment pipeline functions.
"""

import logging
from typing import Dict, Any, List, Optional

from common.utils.exceptions import ValidationException
from moodcoach.services.assessment.tipi_catalog import get_questions_for_locale
from moodcoach.services.assessment.trait_scorer import TraitScorer, TipiValidationError
from moodcoach.services.assessment.trait_service import TraitService
from moodcoach.types import TipiResponse

logger = logging.getLogger(__name__)


def get_questions_pipeline(locale: str = "en") -> Dict[str, Any]:
    """TIPI questions in the requested locale (unknown locales fall back to en)."""
    return {
        "instrument": TraitScorer.INSTRUMENT,
        "scale": {"min": TraitScorer.SCORE_RANGE[0], "max": TraitScorer.SCORE_RANGE[1]},
        "questions": get_questions_for_locale(locale),
    }


async def submit_tipi_pipeline(
    trait_service: TraitService,
    user_id: str,
    responses: List[TipiResponse]
) -> Dict[str, Any]:
    """
    Score and store a TIPI submission.

    Args:
        trait_service: For trait persistence
        user_id: Current user's ID
        responses: All ten answers

    Returns:
        dict with raw, p01 and t scores

    Raises:
        ValidationException: Invalid response set (carries every error)
    """
    try:
        scores = TraitScorer.score(responses)
    except TipiValidationError as e:
        raise ValidationException(message="Invalid TIPI responses", errors=e.errors)

    doc = await trait_service.save_traits(user_id, scores, instrument=TraitScorer.INSTRUMENT)

    return _format_assessment(doc)


async def get_results_pipeline(
    trait_service: TraitService,
    user_id: str
) -> Optional[Dict[str, Any]]:
    """Latest stored assessment, or None if the user has not taken one."""
    doc = await trait_service.get_latest_assessment(user_id)
    return _format_assessment(doc) if doc else None


def _format_assessment(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "instrument": doc.get("instrument"),
        "traitsRaw": doc.get("traitsRaw"),
        "traitsP01": doc.get("traitsP01"),
        "traitsT": doc.get("traitsT"),
        "administeredAt": doc.get("administeredAt"),
    }
