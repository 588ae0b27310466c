"""
Pydantic models for assessment request validation.
"""

from typing import List
from pydantic import BaseModel


# =============================================================================
# Request Schemas
# =============================================================================

class TipiAnswer(BaseModel):
    """One TIPI answer. Range and completeness are checked by TraitScorer
    so every problem is reported at once."""
    questionId: int
    score: int


class TipiSubmitRequest(BaseModel):
    """POST /api/v1/assessment/tipi"""
    responses: List[TipiAnswer]
