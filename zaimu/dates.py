"""Year-month arithmetic and accounting period boundaries."""

from __future__ import annotations

import calendar
from datetime import datetime, time

YearMonth = tuple[int, int]


class InvalidDateError(ValueError):
    """Raised when a year, month or day does not name a real date."""


def _first_of_month(year: int, month: int) -> datetime:
    try:
        return datetime(year, month, 1)
    except (ValueError, OverflowError, TypeError) as exc:
        raise InvalidDateError(f"Invalid date: {year}-{month:02}-01") from exc


def get_next_ym(ym: YearMonth) -> YearMonth:
    """Return the (year, month) that follows ``ym``."""
    year, month = ym
    _first_of_month(year, month)
    return (year + 1, 1) if month == 12 else (year, month + 1)


def get_prev_ym(ym: YearMonth) -> YearMonth:
    """Return the (year, month) that precedes ``ym``."""
    year, month = ym
    _first_of_month(year, month)
    return (year - 1, 12) if month == 1 else (year, month - 1)


def get_end_of_month(year: int, month: int) -> datetime:
    """Return midnight at the start of the last day of the month."""
    _first_of_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, last_day)


def get_opening_and_closing_date(year: int, month: int) -> tuple[datetime, datetime]:
    """Return the first and last instants (to the second) of the month."""
    start = _first_of_month(year, month)
    end = datetime.combine(get_end_of_month(year, month).date(), time(23, 59, 59))
    return start, end