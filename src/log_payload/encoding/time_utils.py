"""Timestamp conversion to local, timezone-aware ISO-8601 text.

Structured time values are converted into the target zone and rendered in
ISO-8601 extended format with millisecond precision and a UTC offset, e.g.
``2024-01-01T00:00:00.000+00:00``.

Structured Inputs:
    datetime: naive values are wall-clock time in the target zone; aware
        values are converted into it
    date: midnight of that day in the target zone
    time.struct_time: naive unless it carries ``tm_gmtoff``

Target Zone:
    Explicit ``tz`` argument, else the host local zone. The encoder passes the
    configured LOCAL_TIMEZONE as ``tz`` when one is set.

Public Functions:
    is_structured_time: True for the structured inputs above
    to_local_datetime: Convert a structured value to an aware datetime
    format_iso_extended: Render an aware datetime to ISO-8601 extended text
"""
from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Optional

__all__ = ["is_structured_time", "to_local_datetime", "format_iso_extended"]


def is_structured_time(value: Any) -> bool:
    return isinstance(value, (datetime, date, time.struct_time))


def _struct_time_to_datetime(st: time.struct_time) -> datetime:
    dt = datetime(st.tm_year, st.tm_mon, st.tm_mday, st.tm_hour, st.tm_min, min(st.tm_sec, 59))
    gmtoff = getattr(st, "tm_gmtoff", None)
    if gmtoff is not None:
        dt = dt.replace(tzinfo=timezone(timedelta(seconds=gmtoff)))
    return dt


def to_local_datetime(value: Any, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a structured time value to an aware datetime in the target zone.

    Args:
        value: datetime, date or struct_time
        tz: Target zone; None means the host local zone

    Returns:
        Timezone-aware datetime
    """
    if isinstance(value, time.struct_time):
        dt = _struct_time_to_datetime(value)
    elif isinstance(value, datetime):
        dt = value
    else:
        dt = datetime(value.year, value.month, value.day)

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        if tz is None:
            # astimezone() on a naive value assumes host local wall time
            return dt.astimezone()
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def format_iso_extended(dt: datetime) -> str:
    return dt.isoformat(timespec="milliseconds")
