# shiftroster/month_calendar.py
from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Tuple, Union

from shiftroster.errors import InvalidMonth

if TYPE_CHECKING:
    from shiftroster.input_data import HolidayRange, WorkingDayCalendar

MonthLike = Union[str, Tuple[int, int], date]

_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


def parse_month(value: MonthLike) -> tuple[int, int]:
    """
    Normalise a month identifier to (year, month).

    Accepts 'YYYY-MM', a (year, month) tuple or a date/datetime (its month).
    """
    if isinstance(value, (date, datetime)):
        return value.year, value.month
    if isinstance(value, str):
        match = _MONTH_RE.match(value)
        if match is None:
            raise InvalidMonth(f"Month must look like 'YYYY-MM'; got {value!r}.")
        year, month = int(match.group(1)), int(match.group(2))
    elif isinstance(value, tuple) and len(value) == 2:
        try:
            year, month = int(value[0]), int(value[1])
        except (TypeError, ValueError) as exc:
            raise InvalidMonth(f"Invalid (year, month) tuple: {value!r}.") from exc
    else:
        raise InvalidMonth(f"Unsupported month identifier: {value!r}.")

    if not (1 <= month <= 12):
        raise InvalidMonth(f"Month must be within [1, 12]; got {month}.")
    if not (1 <= year <= 9999):
        raise InvalidMonth(f"Year out of range: {year}.")
    return year, month


def month_label(value: MonthLike) -> str:
    year, month = parse_month(value)
    return f"{year:04d}-{month:02d}"


def month_days(value: MonthLike) -> list[date]:
    """Every calendar day of the month, ascending."""
    year, month = parse_month(value)
    first = date(year, month, 1)
    n_days = calendar.monthrange(year, month)[1]
    return [first + timedelta(days=i) for i in range(n_days)]


def is_holiday(day: date, holidays: Iterable[HolidayRange]) -> bool:
    return any(h.covers(day) for h in holidays)


def working_dates(
    value: MonthLike,
    working_days: WorkingDayCalendar,
    holidays: Iterable[HolidayRange] = (),
) -> list[date]:
    """
    Days of the month open for scheduling: open weekday AND not inside a holiday.
    Holidays override the working-day calendar.
    """
    holiday_list = list(holidays)
    return [
        d
        for d in month_days(value)
        if working_days.is_open(d) and not is_holiday(d, holiday_list)
    ]
