"""
API routers.
"""

from moodcoach.routers.checkin import router as checkin_router
from moodcoach.routers.assessment import router as assessment_router
from moodcoach.routers.interventions import router as interventions_router
from moodcoach.routers.history import router as history_router

__all__ = [
    "checkin_router",
    "assessment_router",
    "interventions_router",
    "history_router",
]
