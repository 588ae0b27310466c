"""
TIPI trait scoring.

Converts ten Likert responses into Big Five scores on three parallel
scales: raw (1-7), normalized p01 (0-1) and T-scores (0-100).
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from moodcoach.services.assessment.tipi_catalog import TIPI_QUESTIONS, QUESTIONS_BY_ID
from moodcoach.types import BigFiveScores, TipiResponse, TraitScores, TRAITS
from moodcoach.utils import round_half_up


class TipiValidationError(ValueError):
    """Raised when a response set cannot be scored. Carries every violation."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class TraitScorer:
    """
    Scores TIPI response sets.
    Pure functions over the static question catalog.
    """

    SCORE_RANGE = (1, 7)
    REVERSE_BASE = 8  # reverse-coded item contributes 8 - score
    POPULATION_MEAN = 4.0
    POPULATION_STD = 1.5
    INSTRUMENT = "TIPI"

    @classmethod
    def validate(cls, responses: Sequence[TipiResponse]) -> List[str]:
        """
        Validate a response set.

        Args:
            responses: Submitted answers

        Returns:
            List of human-readable errors (empty when valid)

        Rules:
            - Exactly one answer per catalog question
            - Scores between 1 and 7
            - No unknown or duplicate question ids
        """
        errors: List[str] = []
        min_score, max_score = cls.SCORE_RANGE

        if len(responses) != len(TIPI_QUESTIONS):
            errors.append(f"All {len(TIPI_QUESTIONS)} questions must be answered")

        for response in responses:
            if response.score < min_score or response.score > max_score:
                errors.append(
                    f"Question {response.question_id}: Score must be between {min_score} and {max_score}"
                )

            if response.question_id not in QUESTIONS_BY_ID:
                errors.append(f"Invalid question ID: {response.question_id}")

        question_ids = [r.question_id for r in responses]
        if len(set(question_ids)) != len(question_ids):
            errors.append("Duplicate responses detected")

        return errors

    @classmethod
    def calculate_raw_scores(cls, responses: Sequence[TipiResponse]) -> BigFiveScores:
        """
        Average the two items of each trait after reverse coding.

        Raises:
            TipiValidationError: If the response set is invalid
        """
        errors = cls.validate(responses)
        if errors:
            raise TipiValidationError(errors)

        trait_scores: Dict[str, List[int]] = defaultdict(list)
        for response in responses:
            question = QUESTIONS_BY_ID[response.question_id]
            score = response.score
            if question.reverse:
                score = cls.REVERSE_BASE - score
            trait_scores[question.trait].append(score)

        return BigFiveScores(**{
            trait: sum(trait_scores[trait]) / len(trait_scores[trait])
            for trait in TRAITS
        })

    @classmethod
    def convert_to_p01(cls, raw: BigFiveScores) -> BigFiveScores:
        """Map the 1-7 scale onto 0-1."""
        min_score, max_score = cls.SCORE_RANGE
        span = max_score - min_score
        return BigFiveScores(**{
            trait: (raw.get(trait) - min_score) / span for trait in TRAITS
        })

    @classmethod
    def convert_to_t_scores(cls, raw: BigFiveScores) -> BigFiveScores:
        """T = 50 + 10z using population norms, clamped to 0-100 and rounded."""
        return BigFiveScores(**{
            trait: float(cls._t_score(raw.get(trait))) for trait in TRAITS
        })

    @classmethod
    def score(cls, responses: Sequence[TipiResponse]) -> TraitScores:
        """
        Score a response set on all three scales.

        Args:
            responses: Exactly ten answers

        Returns:
            TraitScores derived from one raw computation
        """
        raw = cls.calculate_raw_scores(responses)
        return TraitScores(
            raw=raw,
            p01=cls.convert_to_p01(raw),
            t=cls.convert_to_t_scores(raw),
        )

    @classmethod
    def _t_score(cls, raw_value: float) -> int:
        z_score = (raw_value - cls.POPULATION_MEAN) / cls.POPULATION_STD
        t_score = 50 + z_score * 10
        return int(round_half_up(max(0.0, min(100.0, t_score))))
