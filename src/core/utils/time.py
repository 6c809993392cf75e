"""
Time-related utilities for the application.

All timestamps are generated in UTC. Records keep timezone-aware
datetimes; responses and DynamoDB items use the ISO-8601 form.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return utc_now().isoformat()
