"""MoodCoach - personality-aware mood check-in and coaching API."""

__version__ = "1.0.0"
