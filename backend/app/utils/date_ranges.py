"""
Calendar helpers for availability weeks and analytics periods.

All boundaries are naive datetimes. A week runs Monday 00:00:00.000 through
Sunday 23:59:59.999; a month runs from the first through the last day,
found by stepping to the same day next month and backing off one day.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Tuple

from ..core.constants import DAY_NAMES

END_OF_DAY = time(23, 59, 59, 999000)

DateTimeRange = Tuple[datetime, datetime]


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def week_bounds(day: date) -> DateTimeRange:
    """Monday 00:00 through Sunday 23:59:59.999 of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    sunday = monday + timedelta(days=6)
    return start_of_day(monday), end_of_day(sunday)


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, clamping to the target month's length."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    # Clamp 31st -> 30th/28th/29th by walking back from the next month start
    next_month_first = date(year + (month == 12), month % 12 + 1, 1)
    last_day = (next_month_first - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))


def month_bounds(day: date) -> DateTimeRange:
    first = day.replace(day=1)
    last = add_months(first, 1) - timedelta(days=1)
    return start_of_day(first), end_of_day(last)


def year_bounds(day: date) -> DateTimeRange:
    return start_of_day(date(day.year, 1, 1)), end_of_day(date(day.year, 12, 31))


def previous_week_bounds(day: date) -> DateTimeRange:
    return week_bounds(day - timedelta(days=7))


def previous_month_bounds(day: date) -> DateTimeRange:
    return month_bounds(add_months(day.replace(day=1), -1))


def previous_year_bounds(day: date) -> DateTimeRange:
    return year_bounds(date(day.year - 1, 1, 1))


def day_name(day: date) -> str:
    """Display weekday name, e.g. ``Wednesday``."""
    return DAY_NAMES[day.weekday()]


def parse_hhmm(value: str) -> time:
    """
    Parse a 24h ``HH:MM`` string.

    Raises:
        ValueError: if the value is not a valid clock time
    """
    return datetime.strptime(value, "%H:%M").time()


def combine(day: date, value: str) -> datetime:
    """Absolute timestamp for clock time ``value`` on ``day``."""
    return datetime.combine(day, parse_hhmm(value))


def week_of_month(day: date) -> int:
    """1-based week bucket within the month: days 1-7 are week 1, 8-14 week 2..."""
    return (day.day - 1) // 7 + 1
