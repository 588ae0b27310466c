"""
FastAPI authentication dependency factory.

Example:
    get_current_user_id = create_auth_dependency(get_auth_provider)

    @router.get("/checkins")
    async def list_checkins(user_id: str = Depends(get_current_user_id)):
        ...
"""

import logging
from typing import Callable, Optional

from fastapi import Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def _extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise UnauthorizedException("Missing authorization header")

    if not authorization.lower().startswith(BEARER_PREFIX):
        raise UnauthorizedException("Expected a Bearer token", code="INVALID_AUTH_SCHEME")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthorizedException("Token is empty", code="EMPTY_TOKEN")
    return token


def create_auth_dependency(get_auth_provider: Callable[[], AuthProvider]):
    """
    Build a dependency that resolves the caller's user id.

    The id is the token's "sub" claim ("uid" is accepted for tokens from
    older issuers). Every failure becomes a 401.
    """

    async def get_current_user_id(
        authorization: Optional[str] = Header(None),
    ) -> str:
        token = _extract_bearer_token(authorization)

        try:
            claims = await get_auth_provider().verify_token(token)
        except ValueError as e:
            logger.debug(f"Rejected bearer token: {e}")
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        return str(claims.get("sub") or claims["uid"])

    return get_current_user_id
