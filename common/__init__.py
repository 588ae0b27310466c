"""
Common library for reusable infrastructure components.

- database: Async MongoDB connection (Motor)
- auth: Bearer token verification (JWT)
- ai: Pluggable AI providers (OpenAI, Claude)
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth, create_auth_dependency
from common.ai import AIProvider, ClaudeProvider, OpenAIProvider, get_ai_provider
from common.utils import (
    success_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "create_auth_dependency",
    # AI
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    "get_ai_provider",
    # Utils
    "success_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
