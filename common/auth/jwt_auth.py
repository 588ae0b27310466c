"""
JWT bearer token verification.

Tokens are issued by the identity service; this provider checks the
signature and expiry and hands back the claims. `create_token` exists
for local development and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from jose import jwt, JWTError, ExpiredSignatureError

from common.auth.base import AuthProvider


class JWTAuth(AuthProvider):
    """Verifies JWTs signed with a shared secret."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256"):
        self.secret = secret or None
        self.algorithm = algorithm

    async def verify_token(self, token: str) -> Dict[str, Any]:
        if self.secret is None:
            raise ValueError("Token verification is not configured")

        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ValueError("Token has expired")
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")

        if not claims.get("sub") and not claims.get("uid"):
            raise ValueError("Token missing user ID")
        return claims

    async def create_token(self, user_id: str, expires_in: timedelta = timedelta(hours=1)) -> str:
        """Sign a token for user_id (development and tests only)."""
        if self.secret is None:
            raise ValueError("Token signing is not configured")

        now = datetime.now(timezone.utc)
        payload = {"sub": user_id, "iat": now, "exp": now + expires_in}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)
