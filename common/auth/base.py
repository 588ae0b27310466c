"""
Abstract authentication provider interface.

Account management lives with the identity provider; this service only
needs to turn a bearer token into verified claims.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Implement this interface for different token strategies.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a token and return its claims.

        Args:
            token: Raw bearer token

        Returns:
            Decoded claims; must include "sub" or "uid"

        Raises:
            ValueError: If the token is invalid or expired
        """
        pass
