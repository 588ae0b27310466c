"""Unit tests for the shared auth, settings and AI provider layers."""

import pytest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from pydantic import ValidationError

from common.ai import get_ai_provider
from common.ai.claude import ClaudeProvider
from common.ai.openai import OpenAIProvider
from common.auth import JWTAuth, create_auth_dependency
from common.utils import (
    UnauthorizedException,
    ValidationException,
    offset_paginated_response,
    success_response,
)
from moodcoach.config import Settings


# ─────────────────────────────────────────────────────────────────
# JWT / auth dependency
# ─────────────────────────────────────────────────────────────────


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_round_trip(self):
        auth = JWTAuth(secret="test-secret")
        token = await auth.create_token("user-42")

        claims = await auth.verify_token(token)

        assert claims["sub"] == "user-42"

    @pytest.mark.asyncio
    async def test_expired(self):
        auth = JWTAuth(secret="test-secret")
        token = await auth.create_token("user-42", expires_in=timedelta(seconds=-10))

        with pytest.raises(ValueError, match="expired"):
            await auth.verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_secret(self):
        token = await JWTAuth(secret="one").create_token("user-42")

        with pytest.raises(ValueError):
            await JWTAuth(secret="two").verify_token(token)

    @pytest.mark.asyncio
    async def test_unconfigured_rejects_everything(self):
        with pytest.raises(ValueError, match="not configured"):
            await JWTAuth(secret=None).verify_token("anything")


class TestAuthDependency:
    @pytest.fixture
    def auth(self):
        return JWTAuth(secret="test-secret")

    @pytest.mark.asyncio
    async def test_valid_bearer(self, auth):
        get_user = create_auth_dependency(lambda: auth)
        token = await auth.create_token("user-7")

        assert await get_user(authorization=f"Bearer {token}") == "user-7"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header,code", [
        (None, "UNAUTHORIZED"),
        ("Basic abc", "INVALID_AUTH_SCHEME"),
        ("Bearer ", "EMPTY_TOKEN"),
        ("Bearer not-a-jwt", "INVALID_TOKEN"),
    ])
    async def test_rejections(self, auth, header, code):
        get_user = create_auth_dependency(lambda: auth)

        with pytest.raises(UnauthorizedException) as exc:
            await get_user(authorization=header)

        assert exc.value.status_code == 401
        assert exc.value.code == code


# ─────────────────────────────────────────────────────────────────
# exceptions / responses
# ─────────────────────────────────────────────────────────────────


class TestResponses:
    def test_validation_exception_carries_errors(self):
        exc = ValidationException("Invalid TIPI responses", errors=["a", "b"])

        assert exc.status_code == 422
        assert exc.detail == {
            "message": "Invalid TIPI responses",
            "code": "VALIDATION_ERROR",
            "details": {"errors": ["a", "b"]},
        }

    def test_explicit_none_is_null_data(self):
        assert success_response(None) == {"success": True, "data": None}
        assert success_response() == {"success": True}
        assert success_response(message="ok") == {"success": True, "message": "ok"}

    def test_pagination(self):
        response = offset_paginated_response([1, 2], total=5, limit=2, offset=2)

        assert response["pagination"] == {"limit": 2, "offset": 2, "total": 5, "hasMore": True}


# ─────────────────────────────────────────────────────────────────
# settings
# ─────────────────────────────────────────────────────────────────


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.ORCHESTRATOR_TIMEOUT_MS == 15000
        assert settings.RECENT_CHECKIN_WINDOW == 7
        assert settings.orchestrator_enabled() is False

    def test_orchestrator_needs_url_and_key(self):
        settings = Settings(_env_file=None, ORCHESTRATOR_URL="https://o.test", ORCHESTRATOR_API_KEY="k")
        assert settings.orchestrator_enabled() is True

        settings = Settings(_env_file=None, ORCHESTRATOR_URL="https://o.test")
        assert settings.orchestrator_enabled() is False

    def test_provider_normalized(self):
        assert Settings(_env_file=None, AI_PROVIDER=" Claude ").AI_PROVIDER == "claude"

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, AI_PROVIDER="gemini")

    def test_resolve_language(self):
        settings = Settings(_env_file=None)

        assert settings.resolve_language("vi") == "vi"
        assert settings.resolve_language("xx") == "en"
        assert settings.resolve_language(None) == "en"


# ─────────────────────────────────────────────────────────────────
# AI providers
# ─────────────────────────────────────────────────────────────────


def _settings(**overrides):
    values = dict(
        AI_PROVIDER="openai",
        OPENAI_API_KEY=None,
        OPENAI_MODEL="gpt-4o-mini",
        CLAUDE_API_KEY=None,
        CLAUDE_MODEL="claude-test",
        AI_TIMEOUT_SECONDS=5.0,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestGetAIProvider:
    def test_openai(self):
        provider = get_ai_provider(_settings(OPENAI_API_KEY="sk-test"))
        assert isinstance(provider, OpenAIProvider)

    def test_claude(self):
        provider = get_ai_provider(_settings(AI_PROVIDER="claude", CLAUDE_API_KEY="key"))
        assert isinstance(provider, ClaudeProvider)
        assert provider.name == "claude:claude-test"

    def test_missing_key_disables_ai(self):
        assert get_ai_provider(_settings()) is None

    def test_none(self):
        assert get_ai_provider(_settings(AI_PROVIDER="none", OPENAI_API_KEY="sk-test")) is None


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_json_mode_prefills_brace(self):
        provider = ClaudeProvider(api_key="key", model="claude-test")
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(return_value=SimpleNamespace(
            stop_reason="end_turn",
            content=[SimpleNamespace(type="text", text='"title": "Hi"}')],
        ))

        text = await provider.chat("prompt", system_prompt="sys", response_format={"type": "json_object"})

        assert text == '{"title": "Hi"}'
        params = provider.client.messages.create.call_args.kwargs
        assert params["system"] == "sys"
        assert params["messages"][-1] == {"role": "assistant", "content": "{"}

    @pytest.mark.asyncio
    async def test_plain_text(self):
        provider = ClaudeProvider(api_key="key")
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(return_value=SimpleNamespace(
            stop_reason="end_turn",
            content=[SimpleNamespace(type="text", text="Hello")],
        ))

        assert await provider.chat("prompt") == "Hello"
        assert len(provider.client.messages.create.call_args.kwargs["messages"]) == 1


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_passes_response_format(self):
        provider = OpenAIProvider(api_key="sk-test")
        provider.client = MagicMock()
        choice = SimpleNamespace(finish_reason="stop", message=SimpleNamespace(content="{}"))
        provider.client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(choices=[choice]))

        text = await provider.chat("prompt", system_prompt="sys", response_format={"type": "json_object"})

        assert text == "{}"
        params = provider.client.chat.completions.create.call_args.kwargs
        assert params["response_format"] == {"type": "json_object"}
        assert params["messages"][0] == {"role": "system", "content": "sys"}
