"""
Pydantic models for intervention request validation.
"""

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    """POST /api/v1/interventions/{id}/feedback"""
    score: int = Field(..., ge=1, le=5, description="1-5 stars")
