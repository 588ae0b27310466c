"""History services."""

from moodcoach.services.history.timeline import (
    DATE_RANGES,
    TIMELINE_TYPES,
    date_range_start,
    format_intervention,
    merge_timeline,
    calculate_history_stats,
    calculate_intervention_stats,
)

__all__ = [
    "DATE_RANGES",
    "TIMELINE_TYPES",
    "date_range_start",
    "format_intervention",
    "merge_timeline",
    "calculate_history_stats",
    "calculate_intervention_stats",
]
