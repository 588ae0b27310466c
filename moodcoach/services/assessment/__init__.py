"""Personality assessment services."""

from moodcoach.services.assessment.tipi_catalog import (
    TIPI_QUESTIONS,
    get_questions_for_locale,
    get_question_text,
)
from moodcoach.services.assessment.trait_scorer import TraitScorer, TipiValidationError
from moodcoach.services.assessment.trait_service import TraitService

validate_tipi_responses = TraitScorer.validate
score_tipi_responses = TraitScorer.score

__all__ = [
    "TIPI_QUESTIONS",
    "get_questions_for_locale",
    "get_question_text",
    "TraitScorer",
    "TipiValidationError",
    "TraitService",
    "validate_tipi_responses",
    "score_tipi_responses",
]
