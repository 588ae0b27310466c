"""
Utilities module - API response envelopes and exceptions.
"""

from common.utils.responses import success_response, offset_paginated_response
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)

__all__ = [
    "success_response",
    "offset_paginated_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
]
