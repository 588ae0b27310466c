"""
Coaching orchestrator client.

Calls the external orchestrator service that produces coaching messages.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from moodcoach.types import CheckinRecord, InterventionContext

logger = logging.getLogger(__name__)


class OrchestratorError(Exception):
    """Orchestrator unreachable, timed out or returned a non-2xx status."""


def build_orchestrator_payload(
    user_id: str,
    checkin: CheckinRecord,
    context: InterventionContext,
    history_refs: Optional[List[str]] = None
) -> Dict[str, Any]:
    """
    Build the /api/respond request body.

    Args:
        user_id: User's ID
        checkin: The check-in being answered
        context: Intervention context (analytics and p01 traits)
        history_refs: IDs of the recent check-ins

    Returns:
        JSON-serializable request payload
    """
    latest_checkin: Dict[str, Any] = {
        "mood_score": checkin.mood_score,
        "energy_level": checkin.energy_level,
    }
    if checkin.free_text:
        latest_checkin["note"] = checkin.free_text

    traits = context.personality_traits

    return {
        "user_id": user_id,
        "latest_checkin": latest_checkin,
        "analytics": {
            "average_mood": context.mood_average,
            "trend": context.mood_trend,
            "streak_days": context.streak_days,
        },
        "personality": traits.to_dict() if traits else None,
        "history_refs": list(history_refs or []),
    }


def map_tone_to_template(tone: Optional[str]) -> Optional[str]:
    """
    Map an orchestrator tone label to a template type.

    Returns None for missing or unrecognized tones.
    """
    if not tone:
        return None

    normalized = tone.lower()
    if "compassion" in normalized or "care" in normalized:
        return "compassion"
    if "reflection" in normalized or "insight" in normalized:
        return "reflection"
    if "action" in normalized or "motivate" in normalized:
        return "action"
    return None


class OrchestratorClient:
    """
    HTTP client for the coaching orchestrator.
    One attempt per request; no retries.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_ms: int = 15000,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize OrchestratorClient.

        Args:
            base_url: Orchestrator base URL (trailing slash ignored)
            api_key: Bearer token
            timeout_ms: Request timeout in milliseconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout_ms / 1000
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/api/respond"

    async def request_coaching_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Ask the orchestrator for a coaching message.

        Args:
            payload: Body from build_orchestrator_payload

        Returns:
            Response dict: title, body, suggested_action?, tone_used?, metadata?

        Raises:
            OrchestratorError: Network failure, timeout, non-2xx or non-JSON body
        """
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                response = await client.post(
                    self.endpoint,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise OrchestratorError(f"Orchestrator timed out after {self._timeout}s") from e
        except httpx.RequestError as e:
            raise OrchestratorError(f"Orchestrator request failed: {e}") from e

        if not response.is_success:
            raise OrchestratorError(f"Orchestrator responded with status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise OrchestratorError("Orchestrator returned invalid JSON") from e

        if not isinstance(data, dict):
            raise OrchestratorError("Orchestrator returned an unexpected payload")

        logger.debug(f"Orchestrator replied with tone {data.get('tone_used')}")
        return data
