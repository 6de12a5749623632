"""Calendar-day helpers shared by the MoodPlan engines.

Everything the engines compare is a calendar day (``datetime.date``).
Datetimes are truncated to their day before any comparison.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterator


DAY_NAMES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
DEFAULT_WEEKEND = ("sat", "sun")


def as_day(value: date | datetime) -> date:
    """Normalize a date or datetime to its calendar day (start of day)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(a: date | datetime, b: date | datetime) -> int:
    """Absolute number of whole days between the days of *a* and *b*."""
    return abs((as_day(b) - as_day(a)).days)


def day_range(start: date | datetime, end: date | datetime) -> Iterator[date]:
    """Yield every day in [start, end] inclusive. Empty when start > end."""
    cursor = as_day(start)
    last = as_day(end)
    while cursor <= last:
        yield cursor
        cursor += timedelta(days=1)


def day_index(name: str) -> int:
    """Map 'mon'..'sun' (any case, 3+ letters) to 0..6. Unknown names map to Monday."""
    key = (name or "").strip().lower()[:3]
    if key in DAY_NAMES:
        return DAY_NAMES.index(key)
    return 0


def weekday_number(day: date | datetime, week_start: str = "mon") -> int:
    """Weekday as 1..7 where 1 is *week_start*.

    With the default Monday start: Monday=1 ... Sunday=7.
    With week_start='sun': Sunday=1 ... Saturday=7.
    """
    return (as_day(day).weekday() - day_index(week_start)) % 7 + 1


def is_weekend(day: date | datetime, weekend_days: tuple[str, ...] | list[str] = DEFAULT_WEEKEND) -> bool:
    idx = as_day(day).weekday()
    return any(day_index(name) == idx for name in weekend_days)


def next_weekday(
    day: date | datetime,
    weekend_days: tuple[str, ...] | list[str] = DEFAULT_WEEKEND,
) -> date | None:
    """First day after *day* that is not a weekend day, scanning at most 7 days."""
    cursor = as_day(day)
    for _ in range(7):
        cursor += timedelta(days=1)
        if not is_weekend(cursor, weekend_days):
            return cursor
    return None


def week_bounds(day: date | datetime, week_start: str = "mon") -> tuple[date, date]:
    """First and last day of the week containing *day*."""
    d = as_day(day)
    start = d - timedelta(days=weekday_number(d, week_start) - 1)
    return start, start + timedelta(days=6)


def month_bounds(day: date | datetime) -> tuple[date, date]:
    """First and last day of the month containing *day*."""
    d = as_day(day)
    start = d.replace(day=1)
    if start.month == 12:
        next_month = start.replace(year=start.year + 1, month=1)
    else:
        next_month = start.replace(month=start.month + 1)
    return start, next_month - timedelta(days=1)


def parse_day(value: str | date | datetime | None, tz: tzinfo | None = None) -> date | None:
    """Parse an ISO date or timestamp into a calendar day.

    '2025-10-15' is taken as written. Values with a time part go through
    parse_timestamp first, so '2025-10-14T22:00:00Z' is Oct 15 in Berlin.
    Blank values give None. Raises ValueError on malformed text.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return parse_timestamp(value, tz).date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    if len(text) > 10:
        return parse_timestamp(text, tz).date()
    return date.fromisoformat(text)


def parse_timestamp(value: str | datetime | None, tz: tzinfo | None = None) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'.

    Aware timestamps are converted to naive wall time in *tz* (the host
    zone when None) so every stored timestamp compares against every other.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz).replace(tzinfo=None)
    return parsed
