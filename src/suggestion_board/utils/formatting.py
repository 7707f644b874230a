"""Display formatting for suggestion and comment timestamps."""

from datetime import datetime, tzinfo
from typing import Optional, Union

Timestamp = Union[datetime, str]


def _to_datetime(value: Timestamp, tz: Optional[tzinfo] = None) -> datetime:
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat only accepts "Z" from 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    elif not isinstance(value, datetime):
        raise TypeError(f"Expected datetime or ISO string, got {type(value).__name__}")

    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value


def format_timestamp(value: Timestamp, tz: Optional[tzinfo] = None) -> str:
    """
    Format a timestamp as ``YYYY-MM-DD H:MM am``.

    The hour is on a 12-hour clock without padding, with midnight and noon
    shown as 12. Aware values are converted to ``tz`` when it is given,
    otherwise their own wall-clock time is used.

    Args:
        value: A datetime or an ISO-8601 string
        tz: Optional display timezone

    Returns:
        str: Formatted timestamp
    """
    dt = _to_datetime(value, tz)
    hour = dt.hour % 12 or 12
    suffix = "pm" if dt.hour >= 12 else "am"
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} {hour}:{dt.minute:02d} {suffix}"


def format_locale_datetime(value: Timestamp, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp in US short form, e.g. ``01/05/2024 01:05 PM``."""
    dt = _to_datetime(value, tz)
    hour = dt.hour % 12 or 12
    suffix = "PM" if dt.hour >= 12 else "AM"
    return f"{dt.month:02d}/{dt.day:02d}/{dt.year:04d} {hour:02d}:{dt.minute:02d} {suffix}"
