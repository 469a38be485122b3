# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for Roster.

Design Decisions:
-----------------
1. Timestamps coming from the remote store are timezone-aware; naive values
   are assumed to be UTC.
2. Day boundaries for filters are computed in local time (or an explicit
   zone) so that a same-day from/to range selects that entire day.

Usage:
------
    from roster.utils.datetime import start_of_day, end_of_day

    lower = start_of_day(date(2026, 3, 15))
    upper = end_of_day(date(2026, 3, 15))
"""

from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def local_timezone(name: str | None = None) -> tzinfo | None:
    """Resolve a timezone by IANA name.

    Args:
        name: IANA zone name such as "Europe/Dublin", or None.

    Returns:
        ZoneInfo for the name, or None to mean the machine's local time.
    """
    if name:
        return ZoneInfo(name)
    return None


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _localize(value: datetime, tz: tzinfo | None) -> datetime:
    if tz is None:
        # Offset of the machine zone on that date, DST included
        return value.astimezone()
    return value.replace(tzinfo=tz)


def start_of_day(value: date, tz: tzinfo | None = None) -> datetime:
    """Get 00:00:00 of the given day in the given (or local) zone.

    Args:
        value: A date, or a datetime whose calendar day is used.
        tz: Zone for the boundary; local time when None.

    Returns:
        Timezone-aware datetime at the start of the day.
    """
    return _localize(datetime.combine(_as_date(value), time.min), tz)


def end_of_day(value: date, tz: tzinfo | None = None) -> datetime:
    """Get 23:59:59.999999 of the given day in the given (or local) zone.

    Args:
        value: A date, or a datetime whose calendar day is used.
        tz: Zone for the boundary; local time when None.

    Returns:
        Timezone-aware datetime at the end of the day.
    """
    return _localize(datetime.combine(_as_date(value), time.max), tz)


def format_date(value: date | None) -> str | None:
    """Format a date as ISO 8601 (YYYY-MM-DD) for the wire."""
    if value is None:
        return None
    return _as_date(value).isoformat()
