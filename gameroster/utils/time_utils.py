"""
Time helpers for the Game Roster application.
"""
from datetime import datetime, timezone
from typing import Optional


def now_iso() -> str:
    """
    Get the current UTC time as an ISO-8601 string.

    Returns:
        Timestamp string such as ``2025-03-01T18:30:00+00:00``
    """
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp, tolerating missing or malformed input.

    Example:
        >>> parse_iso("2025-03-01T18:30:00+00:00").year
        2025
        >>> parse_iso("not a date") is None
        True
    """
    if not value or not isinstance(value, str):
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
