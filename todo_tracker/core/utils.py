"""
Core Utilities.

Shared utility functions used across the backend.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def elapsed_ms(start: datetime) -> int:
    """Whole milliseconds between `start` and now."""
    return int((utc_now() - start).total_seconds() * 1000)
