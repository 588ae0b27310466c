"""
Check-in input validation.

Validates submitted check-in fields against allowed ranges.
"""

from typing import Any, List, Optional

from moodcoach.types import ENERGY_LEVELS, MAX_FREE_TEXT_LENGTH, MOOD_SCORE_RANGE


class CheckinValidator:
    """
    Validates check-in values and collects every violation.
    """

    @classmethod
    def validate(
        cls,
        mood_score: Any,
        energy_level: Any,
        free_text: Optional[str] = None
    ) -> List[str]:
        """
        Validate a check-in submission.

        Args:
            mood_score: Mood on the 1-5 scale
            energy_level: "low", "mid" or "high"
            free_text: Optional note

        Returns:
            List of error messages (empty when valid)
        """
        errors: List[str] = []
        min_mood, max_mood = MOOD_SCORE_RANGE

        if isinstance(mood_score, bool) or not isinstance(mood_score, int) \
                or mood_score < min_mood or mood_score > max_mood:
            errors.append(f"Mood score must be between {min_mood} and {max_mood}")

        if energy_level not in ENERGY_LEVELS:
            errors.append("Energy level must be low, mid, or high")

        if free_text is not None:
            if not isinstance(free_text, str):
                errors.append("Free text must be a string")
            elif len(free_text) > MAX_FREE_TEXT_LENGTH:
                errors.append(f"Free text must be {MAX_FREE_TEXT_LENGTH} characters or less")

        return errors

    @staticmethod
    def normalize_free_text(free_text: Optional[str]) -> Optional[str]:
        """Trim the note; blank notes are stored as None."""
        if free_text is None:
            return None
        trimmed = free_text.strip()
        return trimmed or None
