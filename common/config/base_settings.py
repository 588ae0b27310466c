"""
Base settings class for environment configuration.

Values come from environment variables and an optional .env file.
Applications subclass this and add their own fields.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        ORCHESTRATOR_URL: Optional[str] = None

    settings = Settings()
"""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AI_PROVIDERS = ("openai", "claude", "none")


class BaseAppSettings(BaseSettings):
    """Database, auth, AI provider and server settings shared by every app."""

    # ==========================================================================
    # Database
    # ==========================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "moodcoach"

    # ==========================================================================
    # Authentication (tokens are issued elsewhere; this service only verifies)
    # ==========================================================================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"

    # ==========================================================================
    # AI generation
    # ==========================================================================
    AI_PROVIDER: str = "openai"
    AI_TIMEOUT_SECONDS: float = 15.0

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    # ==========================================================================
    # Server
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # ==========================================================================
    # Locales for the assessment catalog
    # ==========================================================================
    DEFAULT_LANGUAGE: str = "en"
    SUPPORTED_LANGUAGES: str = "en,vi,ja"  # Comma-separated

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    @field_validator("AI_PROVIDER")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in AI_PROVIDERS:
            raise ValueError(f"AI_PROVIDER must be one of {', '.join(AI_PROVIDERS)}")
        return value

    @field_validator("AI_TIMEOUT_SECONDS")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("AI_TIMEOUT_SECONDS must be positive")
        return value

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_supported_languages(self) -> List[str]:
        return [lang.strip() for lang in self.SUPPORTED_LANGUAGES.split(",") if lang.strip()]

    def resolve_language(self, locale: Optional[str]) -> str:
        """Requested locale if supported, otherwise DEFAULT_LANGUAGE."""
        if locale and locale in self.get_supported_languages():
            return locale
        return self.DEFAULT_LANGUAGE

    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"
