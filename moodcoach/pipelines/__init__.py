"""
Pipeline functions - stateless orchestration over the services.
"""

from moodcoach.pipelines.checkin import (
    submit_checkin_pipeline,
    list_checkins_pipeline,
    get_analytics_pipeline,
)
from moodcoach.pipelines.assessment import (
    get_questions_pipeline,
    submit_tipi_pipeline,
    get_results_pipeline,
)
from moodcoach.pipelines.intervention import (
    list_interventions_pipeline,
    submit_feedback_pipeline,
    mark_viewed_pipeline,
)
from moodcoach.pipelines.history import get_history_pipeline

__all__ = [
    "submit_checkin_pipeline",
    "list_checkins_pipeline",
    "get_analytics_pipeline",
    "get_questions_pipeline",
    "submit_tipi_pipeline",
    "get_results_pipeline",
    "list_interventions_pipeline",
    "submit_feedback_pipeline",
    "mark_viewed_pipeline",
    "get_history_pipeline",
]
