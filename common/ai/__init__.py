"""
AI module - Pluggable AI providers (OpenAI, Claude).
"""

import logging
from typing import Optional

from common.ai.base import AIProvider
from common.ai.claude import ClaudeProvider
from common.ai.openai import OpenAIProvider

logger = logging.getLogger(__name__)


def get_ai_provider(settings) -> Optional[AIProvider]:
    """
    Build the configured AI provider.

    Returns None when AI generation is disabled or the provider's API key
    is missing, so callers can fall back to deterministic behaviour.
    """
    provider = settings.AI_PROVIDER.lower()

    if provider == "openai" and settings.OPENAI_API_KEY:
        return OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )

    if provider == "claude" and settings.CLAUDE_API_KEY:
        return ClaudeProvider(
            api_key=settings.CLAUDE_API_KEY,
            model=settings.CLAUDE_MODEL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )

    if provider != "none":
        logger.warning(f"AI provider '{provider}' is not configured; using template messages only")
    return None


__all__ = ["AIProvider", "ClaudeProvider", "OpenAIProvider", "get_ai_provider"]
