"""Utility functions for Sticky Board."""

import math
from datetime import UTC, datetime


def now_ms(dt: datetime | None = None) -> int:
    """
    Get a UTC timestamp in epoch milliseconds.

    Args:
        dt: Datetime to convert, or None for the current time.  Naive
            datetimes are assumed to already be in UTC.

    Returns:
        Milliseconds since 1970-01-01 UTC

    """
    if dt is None:
        dt = datetime.now(tz=UTC)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return round(dt.astimezone(UTC).timestamp() * 1000)


def is_finite_number(value: object) -> bool:
    """
    Check whether ``value`` is a real, finite number.

    Booleans are not numbers here, and neither are numeric strings.

    Args:
        value: Value to check

    Returns:
        True if ``value`` is a finite int or float

    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def clamp(value: float, low: float, high: float) -> float:
    """
    Constrain ``value`` into ``[low, high]``.

    Non-finite values are pulled to ``low``.
    """
    if not is_finite_number(value):
        return low
    return min(high, max(low, value))
