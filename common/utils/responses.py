"""
Standard API response helpers.

Provides consistent response formatting for success and list cases.

Example:
    from common.utils import success_response

    @router.get("/checkins/analytics")
    async def get_analytics(...):
        return success_response(analytics.to_dict())
"""

from typing import Any, Optional, Dict

# Distinguishes "no data" from an explicit None payload
_NO_DATA = object()


def success_response(
    data: Any = _NO_DATA,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (can be dict, list, or any serializable type).
            An explicit None is kept and serialized as null.
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not _NO_DATA:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def offset_paginated_response(
    items: list,
    total: int,
    limit: int,
    offset: int,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Create an offset-paginated success response.

    Args:
        items: Items for the current window
        total: Total number of items across all windows
        limit: Window size
        offset: Items skipped
        extra: Additional top-level keys (e.g. stats)

    Returns:
        Dictionary with success=True, data and pagination metadata
    """
    response: Dict[str, Any] = {
        "success": True,
        "data": items,
        "pagination": {
            "limit": limit,
            "offset": offset,
            "total": total,
            "hasMore": total > offset + limit,
        },
    }

    if extra:
        response.update(extra)

    return response
