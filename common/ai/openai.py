"""
OpenAI chat completion provider.

JSON mode maps directly onto the Chat Completions `response_format`
parameter.
"""

import logging
from typing import Optional, Dict, Any, List

from openai import AsyncOpenAI

from common.ai.base import AIProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """OpenAI GPT provider (default model gpt-4o-mini)."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 15.0):
        self.client = AsyncOpenAI(api_key=api_key, max_retries=0, timeout=timeout)
        self.model = model

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        temperature: float = 0.7,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": message})

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if self.wants_json(response_format):
            params["response_format"] = response_format

        response = await self.client.chat.completions.create(**params)

        choice = response.choices[0]
        if choice.finish_reason == "length":
            logger.warning(f"{self.name} reply truncated at {max_tokens} tokens")
        return choice.message.content or ""
