from datetime import datetime, time, timedelta

import pytest

from zaimu.dates import (
    InvalidDateError,
    get_end_of_month,
    get_next_ym,
    get_opening_and_closing_date,
    get_prev_ym,
)


def test_next_ym_wraps_year():
    assert get_next_ym((2024, 12)) == (2025, 1)


def test_prev_ym_wraps_year():
    assert get_prev_ym((2025, 1)) == (2024, 12)


@pytest.mark.parametrize("ym", [(2024, 1), (2024, 6), (2024, 12), (2025, 2)])
def test_prev_and_next_are_inverse(ym):
    assert get_prev_ym(get_next_ym(ym)) == ym
    assert get_next_ym(get_prev_ym(ym)) == ym


def test_end_of_month_leap_february():
    assert get_end_of_month(2024, 2) == datetime(2024, 2, 29)


@pytest.mark.parametrize("year, month", [(2023, 2), (2024, 4), (2024, 12), (2025, 1)])
def test_end_of_month_is_last_day(year, month):
    end = get_end_of_month(year, month)
    assert (end.year, end.month) == (year, month)
    assert end.time() == time()
    next_year, next_month = get_next_ym((year, month))
    assert end + timedelta(days=1) == datetime(next_year, next_month, 1)


@pytest.mark.parametrize("year, month", [(2025, 3), (2024, 2), (2024, 12)])
def test_opening_and_closing_span_whole_month(year, month):
    start, end = get_opening_and_closing_date(year, month)
    assert start == datetime(year, month, 1)
    assert end.date() == get_end_of_month(year, month).date()
    assert end.time() == time(23, 59, 59)
    next_year, next_month = get_next_ym((year, month))
    assert end + timedelta(seconds=1) == datetime(next_year, next_month, 1)


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month_raises(month):
    with pytest.raises(InvalidDateError):
        get_end_of_month(2025, month)
    with pytest.raises(InvalidDateError):
        get_opening_and_closing_date(2025, month)
    with pytest.raises(InvalidDateError):
        get_next_ym((2025, month))
    with pytest.raises(InvalidDateError):
        get_prev_ym((2025, month))


def test_invalid_date_error_is_value_error():
    with pytest.raises(ValueError):
        get_end_of_month(2025, 14)