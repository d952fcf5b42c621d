from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    try:
        d = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month {value!r} (expected YYYY-MM)")
    return d.year, d.month


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def week_bounds(day: date, *, week_start: int = 0) -> tuple[date, date]:
    """First and last day of the calendar week containing `day`."""
    start = day - timedelta(days=(day.weekday() - week_start) % 7)
    return start, start + timedelta(days=6)


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def hours_between(start: time, end: time, *, precision: int = 2) -> float:
    """Hours from `start` to `end` on the same calendar day."""
    anchor = date(2000, 1, 1)
    delta = datetime.combine(anchor, end) - datetime.combine(anchor, start)
    return round(delta.total_seconds() / 3600, precision)
