"""Small numeric and time helpers shared by the scoring and analytics services."""

import math
from datetime import datetime, timezone


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to `digits` decimals with halves rounded up.

    Python's round() uses banker's rounding, which would turn 12.5% into
    12 and 2.25 into 2.2; percentages and averages here round 0.5 up.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
