from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime, the way timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_current_timezone(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a stored timestamp to an aware datetime in the local zone.
    Naive values are treated as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone()
