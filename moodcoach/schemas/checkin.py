"""
Pydantic models for check-in request/response validation.
"""

from datetime import datetime
from typing import Optional, Dict
from pydantic import BaseModel, Field


# =============================================================================
# Request Schemas
# =============================================================================

class CheckInRequest(BaseModel):
    """POST /api/v1/checkins"""
    moodScore: int = Field(..., ge=1, le=5, description="1-5 scale")
    energyLevel: str = Field(..., pattern="^(low|mid|high)$")
    freeText: Optional[str] = Field(None, max_length=280)


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class CheckInResponse(BaseModel):
    """Check-in in responses."""
    id: str
    userId: str
    moodScore: int
    energyLevel: str
    freeText: Optional[str] = None
    createdAt: datetime


class MoodAnalyticsResponse(BaseModel):
    """GET /api/v1/checkins/analytics"""
    averageMood: float
    moodTrend: str
    energyDistribution: Dict[str, int]
    totalCheckins: int
    streakDays: int
