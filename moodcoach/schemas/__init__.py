"""
Request/response schemas.
"""

from moodcoach.schemas.checkin import CheckInRequest, CheckInResponse, MoodAnalyticsResponse
from moodcoach.schemas.assessment import TipiAnswer, TipiSubmitRequest
from moodcoach.schemas.intervention import FeedbackRequest

__all__ = [
    "CheckInRequest",
    "CheckInResponse",
    "MoodAnalyticsResponse",
    "TipiAnswer",
    "TipiSubmitRequest",
    "FeedbackRequest",
]
