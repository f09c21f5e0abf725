from __future__ import annotations

from datetime import date

import pytest

from shiftroster.errors import InvalidInput, InvalidMonth
from shiftroster.input_data import HolidayRange, WorkingDayCalendar, weekday_index
from shiftroster.month_calendar import (
    month_days,
    month_label,
    parse_month,
    working_dates,
)

MON_TO_FRI = WorkingDayCalendar({1: True, 2: True, 3: True, 4: True, 5: True})


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-04", (2025, 4)),
        ("2025-4", (2025, 4)),
        ((2024, 12), (2024, 12)),
        (date(2023, 2, 17), (2023, 2)),
    ],
)
def test_parse_month_accepts_supported_forms(value, expected):
    assert parse_month(value) == expected


@pytest.mark.parametrize("value", ["2025-13", "2025-00", "2025/01", "April", 202504, (2025,)])
def test_parse_month_rejects_malformed_values(value):
    with pytest.raises(InvalidMonth):
        parse_month(value)


def test_invalid_month_is_an_invalid_input():
    assert issubclass(InvalidMonth, InvalidInput)
    assert issubclass(InvalidInput, ValueError)


def test_month_days_handles_leap_years():
    days = month_days("2024-02")
    assert len(days) == 29
    assert days[0] == date(2024, 2, 1)
    assert days[-1] == date(2024, 2, 29)
    assert month_label((2024, 2)) == "2024-02"


def test_weekday_index_counts_from_sunday():
    assert weekday_index(date(2025, 4, 6)) == 0  # Sunday
    assert weekday_index(date(2025, 4, 7)) == 1  # Monday
    assert weekday_index(date(2025, 4, 5)) == 6  # Saturday


def test_unconfigured_calendar_opens_every_day():
    cal = WorkingDayCalendar()
    assert not cal.configured
    assert len(working_dates("2025-04", cal)) == 30


def test_explicit_calendar_closes_missing_weekdays():
    days = working_dates("2025-04", MON_TO_FRI)
    # April 2025 has eight weekend days
    assert len(days) == 22
    assert all(d.weekday() < 5 for d in days)


def test_explicit_false_entry_closes_the_weekday():
    cal = WorkingDayCalendar({0: False, 1: True})
    assert cal.configured
    assert cal.is_open_weekday(1)
    assert not cal.is_open_weekday(0)
    assert not cal.is_open_weekday(3)


def test_holidays_override_the_calendar():
    holidays = [
        HolidayRange(start=date(2025, 4, 14), end=date(2025, 4, 14)),
        HolidayRange(start="2025-04-05", end="2025-04-06"),  # weekend, already closed
    ]
    days = working_dates("2025-04", MON_TO_FRI, holidays)
    assert len(days) == 21
    assert date(2025, 4, 14) not in days


def test_calendar_rejects_out_of_range_weekday():
    with pytest.raises(InvalidInput):
        WorkingDayCalendar({7: True})
