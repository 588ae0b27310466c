"""
AI-powered intervention generator.

Wraps the configured AIProvider (OpenAI or Claude) and turns its reply
into a validated intervention message.
"""

import logging
from dataclasses import dataclass

from common.ai.base import AIProvider
from moodcoach.services.intervention.message_composer import parse_ai_response
from moodcoach.services.intervention.prompt_builder import SYSTEM_PROMPT, build_intervention_prompt
from moodcoach.types import InterventionContext, InterventionMessage

logger = logging.getLogger(__name__)


class AIGenerationError(Exception):
    """The provider failed or returned an unusable message."""


@dataclass(frozen=True)
class GeneratedIntervention:
    title: str
    body: str
    cta_text: str
    template_type: str

    @property
    def message(self) -> InterventionMessage:
        return InterventionMessage(title=self.title, body=self.body, cta_text=self.cta_text)


class AIInterventionGenerator:
    """
    Generates intervention messages with an LLM.
    Raises on any failure; the composer decides what to fall back to.
    """

    MAX_TOKENS = 300
    TEMPERATURE = 0.7

    def __init__(self, provider: AIProvider):
        """
        Initialize AIInterventionGenerator.

        Args:
            provider: AI provider from common.ai.get_ai_provider
        """
        self._provider = provider

    async def generate(self, template: str, context: InterventionContext) -> GeneratedIntervention:
        """
        Generate a message for the given template and context.

        Raises:
            AIGenerationError: Empty, unparseable or invalid reply
            Exception: Provider errors propagate unchanged
        """
        prompt = build_intervention_prompt(template, context)

        response = await self._provider.chat(
            prompt,
            system_prompt=SYSTEM_PROMPT,
            max_tokens=self.MAX_TOKENS,
            temperature=self.TEMPERATURE,
            response_format={"type": "json_object"},
        )

        if not response or not response.strip():
            raise AIGenerationError(f"Empty response from {self._provider.name}")

        message = parse_ai_response(response)
        if message is None:
            raise AIGenerationError(f"Invalid intervention message from {self._provider.name}")

        logger.info(f"AI intervention generated by {self._provider.name} ({template})")
        return GeneratedIntervention(
            title=message.title,
            body=message.body,
            cta_text=message.cta_text,
            template_type=template,
        )
