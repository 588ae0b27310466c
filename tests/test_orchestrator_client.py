"""Unit tests for the orchestrator HTTP client."""

import json

import httpx
import pytest

from moodcoach.services.intervention.orchestrator_client import (
    OrchestratorClient,
    OrchestratorError,
    build_orchestrator_payload,
    map_tone_to_template,
)

from factories import make_checkin, make_context, make_traits


def _client(handler, base_url="https://orchestrator.test/"):
    return OrchestratorClient(
        base_url=base_url,
        api_key="secret-key",
        timeout_ms=500,
        transport=httpx.MockTransport(handler),
    )


# ─────────────────────────────────────────────────────────────────
# request_coaching_message
# ─────────────────────────────────────────────────────────────────


class TestRequestCoachingMessage:
    @pytest.mark.asyncio
    async def test_posts_payload_with_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"title": "Hi", "body": "There", "tone_used": "care"})

        response = await _client(handler).request_coaching_message({"user_id": "u1"})

        assert seen["url"] == "https://orchestrator.test/api/respond"
        assert seen["auth"] == "Bearer secret-key"
        assert seen["body"] == {"user_id": "u1"}
        assert response["title"] == "Hi"

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self):
        client = _client(lambda request: httpx.Response(503))

        with pytest.raises(OrchestratorError, match="503"):
            await client.request_coaching_message({})

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(OrchestratorError):
            await _client(handler).request_coaching_message({})

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(OrchestratorError, match="timed out"):
            await _client(handler).request_coaching_message({})

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        client = _client(lambda request: httpx.Response(200, content=b"not json"))

        with pytest.raises(OrchestratorError):
            await client.request_coaching_message({})


# ─────────────────────────────────────────────────────────────────
# helpers
# ─────────────────────────────────────────────────────────────────


class TestMapToneToTemplate:
    @pytest.mark.parametrize("tone,expected", [
        ("Compassionate", "compassion"),
        ("self-care", "compassion"),
        ("reflection", "reflection"),
        ("Insightful", "reflection"),
        ("call to action", "action"),
        ("motivate", "action"),
        ("neutral", None),
        ("", None),
        (None, None),
    ])
    def test_mapping(self, tone, expected):
        assert map_tone_to_template(tone) == expected


class TestBuildPayload:
    def test_full_payload(self):
        checkin = make_checkin(mood=2, energy="low", free_text="long week")
        context = make_context(
            mood_average=2.5,
            mood_trend="declining",
            streak_days=3,
            personality_traits=make_traits(openness=0.9),
        )

        payload = build_orchestrator_payload("u1", checkin, context, history_refs=["a", "b"])

        assert payload["user_id"] == "u1"
        assert payload["latest_checkin"] == {"mood_score": 2, "energy_level": "low", "note": "long week"}
        assert payload["analytics"] == {"average_mood": 2.5, "trend": "declining", "streak_days": 3}
        assert payload["personality"]["openness"] == 0.9
        assert payload["history_refs"] == ["a", "b"]

    def test_optional_fields(self):
        payload = build_orchestrator_payload("u1", make_checkin(), make_context())

        assert "note" not in payload["latest_checkin"]
        assert payload["personality"] is None
        assert payload["history_refs"] == []
