"""
Anthropic Claude provider.

The Messages API has no JSON mode. When a JSON object is requested the
assistant turn is prefilled with "{" and the brace is restored on the
returned text, which keeps the model from wrapping the object in prose.
"""

import logging
from typing import Optional, Dict, Any, List

from anthropic import AsyncAnthropic

from common.ai.base import AIProvider

logger = logging.getLogger(__name__)

JSON_PREFILL = "{"


class ClaudeProvider(AIProvider):
    """Anthropic Claude provider."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        timeout: float = 15.0,
    ):
        self.client = AsyncAnthropic(api_key=api_key, max_retries=0, timeout=timeout)
        self.model = model

    @property
    def name(self) -> str:
        return f"claude:{self.model}"

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        temperature: float = 0.7,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        json_mode = self.wants_json(response_format)

        messages: List[Dict[str, str]] = [{"role": "user", "content": message}]
        if json_mode:
            messages.append({"role": "assistant", "content": JSON_PREFILL})

        params: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system_prompt:
            params["system"] = system_prompt

        response = await self.client.messages.create(**params)

        if response.stop_reason == "max_tokens":
            logger.warning(f"{self.name} reply truncated at {max_tokens} tokens")

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if json_mode and text:
            return JSON_PREFILL + text
        return text
