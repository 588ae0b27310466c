"""
MoodCoach application settings.

Extends the base settings with coaching-engine configuration.
"""

from typing import Optional
from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """MoodCoach-specific settings."""

    # ==========================================================================
    # Coaching Orchestrator
    # ==========================================================================
    ORCHESTRATOR_URL: Optional[str] = None
    ORCHESTRATOR_API_KEY: Optional[str] = None
    ORCHESTRATOR_TIMEOUT_MS: int = 15000

    # ==========================================================================
    # Analytics
    # ==========================================================================
    # Check-ins considered for intervention decisions
    RECENT_CHECKIN_WINDOW: int = 7

    # Days of history behind the dashboard analytics
    ANALYTICS_LOOKBACK_DAYS: int = 30

    def orchestrator_enabled(self) -> bool:
        """Orchestrator is used only when both URL and key are set."""
        return bool(self.ORCHESTRATOR_URL and self.ORCHESTRATOR_API_KEY)


# Global settings instance
settings = Settings()
