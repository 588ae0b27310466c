"""
Abstract AI provider interface.

The intervention generator only needs one thing from a language model:
a single-shot completion, optionally constrained to a JSON object.
Providers implement that and nothing else.

Example:
    from common.ai import get_ai_provider

    provider = get_ai_provider(settings)
    if provider:
        text = await provider.chat(prompt, system_prompt=SYSTEM_PROMPT)
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

JSON_OBJECT_FORMAT = {"type": "json_object"}


class AIProvider(ABC):
    """
    Abstract AI provider interface.

    Subclasses wrap one vendor SDK. Errors from the SDK propagate to the
    caller; retries are disabled so one slow provider cannot stall a
    check-in past its timeout.
    """

    @abstractmethod
    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 300,
        temperature: float = 0.7,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Run one completion.

        Args:
            message: User prompt
            system_prompt: Optional system instructions
            max_tokens: Maximum tokens in the reply
            temperature: Sampling temperature (0-1)
            response_format: {"type": "json_object"} to request JSON output

        Returns:
            Reply text (may be empty)
        """

    @property
    def name(self) -> str:
        """Short provider name used in logs."""
        return self.__class__.__name__

    @staticmethod
    def wants_json(response_format: Optional[Dict[str, Any]]) -> bool:
        return bool(response_format) and response_format.get("type") == JSON_OBJECT_FORMAT["type"]
