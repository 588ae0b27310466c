"""
HTTP exceptions with machine-readable error codes.

Every error body has the shape {"message": ..., "code": ..., "details": ...}
so clients can branch on `code` rather than parse messages.

Example:
    from common.utils import ValidationException

    errors = TraitScorer.validate(responses)
    if errors:
        raise ValidationException("Invalid TIPI responses", errors=errors)
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception.

    Subclasses set `status`, `default_message` and `default_code`;
    callers override message and code per raise site.
    """

    status = 500
    default_message = "Internal server error"
    default_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code

        detail: Dict[str, Any] = {"message": self.message, "code": self.code}
        if details is not None:
            detail["details"] = details

        super().__init__(status_code=self.status, detail=detail, headers=headers)


class BadRequestException(APIException):
    """400 - malformed filters or parameters."""

    status = 400
    default_message = "Bad request"
    default_code = "BAD_REQUEST"


class UnauthorizedException(APIException):
    """401 - missing, malformed or rejected bearer token."""

    status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, code, details, headers={"WWW-Authenticate": "Bearer"})


class NotFoundException(APIException):
    """404 - resource missing or owned by another user."""

    status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ValidationException(APIException):
    """
    422 - domain validation failed.

    `errors` carries every violation found, not just the first.
    """

    status = 422
    default_message = "Validation error"
    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        errors: Optional[list] = None,
    ):
        self.errors = list(errors or [])
        if self.errors:
            details = {"errors": self.errors, **(details or {})}
        super().__init__(message, code, details)
