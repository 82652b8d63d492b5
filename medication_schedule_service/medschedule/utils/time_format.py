# medschedule/utils/time_format.py
from __future__ import annotations

from datetime import datetime, time

def parse_hhmm(hhmm: str) -> time:
    h, m = map(int, hhmm.strip().split(":"))
    return time(hour=h, minute=m)

def format_hhmm(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"

def wall_clock(dt: datetime) -> datetime:
    # aware values are moved to the device's local zone before the zone is dropped
    return dt.astimezone().replace(tzinfo=None) if dt.tzinfo is not None else dt

def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}" + {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")

def format_occurrence(dt: datetime) -> str:
    """
    Reminder-list label, e.g. "October 20th, 2026 at 9:00 AM (Tuesday)".
    """
    hour12 = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%B} {_ordinal(dt.day)}, {dt.year} at {hour12}:{dt.minute:02d} {meridiem} ({dt:%A})"
