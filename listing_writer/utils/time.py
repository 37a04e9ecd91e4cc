"""
UTC timestamp utilities for Listing Writer.

All timestamps are in UTC with explicit timezone markers.

This module provides:
- utc_now(): Current time as timezone-aware datetime
- utc_timestamp(): ISO 8601 timestamp string with 'Z' suffix
- request_id_from_timestamp(): Sortable request identifier for log correlation

Examples:
    >>> utc_timestamp()
    '2025-11-02T08:30:45Z'
    >>> request_id_from_timestamp()
    'req-20251102T083045Z-1a2b3c'
"""

import secrets
from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return current time in UTC with timezone info.

    Note:
        NEVER use datetime.now() without timezone parameter.
        NEVER use datetime.utcnow() (deprecated, returns naive datetime).
    """
    return datetime.now(UTC)


def utc_timestamp() -> str:
    """
    Return ISO 8601 timestamp string with 'Z' suffix.

    Format: YYYY-MM-DDTHH:MM:SSZ

    Used for LLM responses and log records.
    """
    return utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


def request_id_from_timestamp(dt: datetime | None = None) -> str:
    """
    Generate a request identifier from a UTC timestamp.

    Format: req-YYYYMMDDTHHMMSSZ-<6 hex chars>. The random tail keeps ids
    unique for requests started within the same second.

    Args:
        dt: Optional timezone-aware datetime. If None, uses utc_now().

    Returns:
        str: Request identifier

    Raises:
        ValueError: If dt is provided but is naive (missing timezone)

    Example:
        >>> from datetime import datetime, timezone
        >>> request_id_from_timestamp(datetime(2025, 11, 2, 8, 30, 45, tzinfo=timezone.utc))
        'req-20251102T083045Z-...'
    """
    if dt is None:
        dt = utc_now()

    if dt.tzinfo is None:
        raise ValueError(
            "Datetime must be timezone-aware (use timezone.utc). "
            "Got naive datetime. Use utc_now() or ensure dt has tzinfo set."
        )

    return f"req-{dt.strftime('%Y%m%dT%H%M%SZ')}-{secrets.token_hex(3)}"
