"""Lenient timestamp parsing shared by models, CLI options and query params."""

from datetime import datetime, timezone
from typing import Any, Optional

# Sorts before every real timestamp
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 string (``Z`` suffix allowed) or datetime.

    Returns None for missing or unparsable input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    try:
        s = s.replace("Z", "+00:00")
        if len(s) <= 10:
            return datetime.fromisoformat(s + "T00:00:00+00:00")
        return ensure_utc(datetime.fromisoformat(s))
    except (ValueError, TypeError):
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
