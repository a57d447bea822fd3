"""Shared date and time utilities.

Weekday naming/parsing and "HH:MM" clock-time helpers.
"""
from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Optional, Tuple

__all__ = [
    "DAY_MAP",
    "WEEKDAYS",
    "FMT_HHMM",
    "normalize_day",
    "weekday_name",
    "parse_hhmm",
    "format_hhmm",
    "at_time",
    "minutes_between",
]

# Full weekday names in Python's weekday() order (Monday == 0)
WEEKDAYS: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Day-of-week name/abbreviation to canonical weekday name
DAY_MAP = {
    "monday": "Monday",
    "mon": "Monday",
    "tuesday": "Tuesday",
    "tue": "Tuesday",
    "tues": "Tuesday",
    "wednesday": "Wednesday",
    "wed": "Wednesday",
    "thursday": "Thursday",
    "thu": "Thursday",
    "thur": "Thursday",
    "thurs": "Thursday",
    "friday": "Friday",
    "fri": "Friday",
    "saturday": "Saturday",
    "sat": "Saturday",
    "sunday": "Sunday",
    "sun": "Sunday",
}

FMT_HHMM = "%H:%M"

_RE_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def normalize_day(day_name: str) -> Optional[str]:
    """Canonical weekday name for a full or abbreviated name ('wed' -> 'Wednesday')."""
    return DAY_MAP.get((day_name or "").lower().strip())


def weekday_name(moment: _dt.date) -> str:
    """Weekday name of a date or datetime."""
    return WEEKDAYS[moment.weekday()]


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Parse a zero-padded 24h "HH:MM" string into (hours, minutes).

    Raises:
        ValueError: the string is not a valid zero-padded clock time.
    """
    m = _RE_HHMM.match(str(value or "").strip())
    if not m:
        raise ValueError(f"Invalid time (expected zero-padded HH:MM): {value!r}")
    return int(m.group(1)), int(m.group(2))


def format_hhmm(moment: _dt.datetime) -> str:
    """Zero-padded "HH:MM" for a datetime; comparable lexicographically."""
    return moment.strftime(FMT_HHMM)


def at_time(day: _dt.date, hhmm: str, tzinfo: Optional[_dt.tzinfo] = None) -> _dt.datetime:
    """Combine a date and an "HH:MM" string into a datetime (naive unless tzinfo)."""
    hh, mm = parse_hhmm(hhmm)
    return _dt.datetime(day.year, day.month, day.day, hh, mm, tzinfo=tzinfo)


def minutes_between(start: _dt.datetime, end: _dt.datetime) -> int:
    """Whole minutes from start to end, floored (negative when end < start)."""
    return math.floor((end - start).total_seconds() / 60)
