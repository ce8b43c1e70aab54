"""
Date and time helpers.

Records are stamped in UTC ISO format; the local timezone (Chile) is only
used for display.
"""
from datetime import datetime
from typing import Optional
import pytz
from app.core.config import settings
from app.core.constants import ISO_DATE_FORMAT


LOCAL_TZ = pytz.timezone(settings.LOCAL_TIMEZONE)
UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """
    Get current datetime in UTC.

    Returns:
        Timezone-aware current datetime
    """
    return datetime.now(UTC_TZ)


def utc_now_iso() -> str:
    """
    Current UTC time as an ISO 8601 string with millisecond precision.

    Example:
        "2024-05-10T14:03:21.512Z"
    """
    now = utc_now()
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def epoch_millis(dt: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch for dt (default: now)."""
    dt = dt or utc_now()
    return int(dt.timestamp() * 1000)


def get_today_utc() -> str:
    """
    Get today's date in UTC.

    Returns:
        Date string in format YYYY-MM-DD
    """
    return utc_now().strftime(ISO_DATE_FORMAT)


def parse_iso_datetime(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as stored by the data service.

    Naive values are taken as UTC.
    """
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = UTC_TZ.localize(dt)
    return dt


def format_datetime_local(value: str, format: str = "%d-%m-%Y %H:%M") -> str:
    """
    Format a stored ISO timestamp in the local timezone.

    Args:
        value: ISO timestamp
        format: Format string

    Returns:
        Formatted datetime string, or the raw value if it cannot be parsed
    """
    try:
        dt = parse_iso_datetime(value)
    except (ValueError, AttributeError):
        return value or ""
    return dt.astimezone(LOCAL_TZ).strftime(format)


def format_date_local(value: str) -> str:
    """
    Format a stored ISO timestamp as a local date (es-CL style dd-mm-yyyy).

    Plain dates (YYYY-MM-DD) are shown as they are, without timezone shift.
    """
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).strftime("%d-%m-%Y")
    except (ValueError, TypeError):
        return format_datetime_local(value, "%d-%m-%Y")


def get_local_today_label() -> str:
    """Today's date in the local timezone, for the dashboard header."""
    return datetime.now(LOCAL_TZ).strftime("%d-%m-%Y")
