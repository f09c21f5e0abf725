from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from shiftroster.errors import InvalidInput
from shiftroster.month_calendar import MonthLike, parse_month
from shiftroster.staff import StaffMember

_HM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def to_date(value: Any) -> date:
    """Coerce date, datetime or ISO 'YYYY-MM-DD' strings to datetime.date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError as exc:
            raise InvalidInput(f"Invalid date string '{value}'.") from exc
    raise InvalidInput(
        f"Date entries must be ISO strings or date/datetime objects; got {type(value)!r}."
    )


def _minutes(hm: str, field_name: str, shift_id: str) -> int:
    match = _HM_RE.match(str(hm))
    if match is None:
        raise InvalidInput(f"Shift '{shift_id}': {field_name} must be HH:MM, got {hm!r}.")
    hh, mm = int(match.group(1)), int(match.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise InvalidInput(f"Shift '{shift_id}': {field_name} out of range ({hm!r}).")
    return hh * 60 + mm


@dataclass(frozen=True)
class ShiftDefinition:
    """A named work period with per-role staffing requirements."""

    id: str
    name: str
    start_time: str = "00:00"
    end_time: str = "00:00"
    required_a: int = 0
    required_b: int = 0
    department_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        if not self.id:
            raise InvalidInput("Shift id must be a non-empty string.")
        for attr in ("required_a", "required_b"):
            val = getattr(self, attr)
            if isinstance(val, bool) or not isinstance(val, int):
                raise InvalidInput(f"Shift '{self.id}': {attr} must be an int.")
            if val < 0:
                raise InvalidInput(f"Shift '{self.id}': {attr} must be non-negative.")
        _minutes(self.start_time, "start_time", self.id)
        _minutes(self.end_time, "end_time", self.id)

    @property
    def duration_minutes(self) -> int:
        """Length of the shift; an end at or before the start wraps past midnight."""
        start = _minutes(self.start_time, "start_time", self.id)
        end = _minutes(self.end_time, "end_time", self.id)
        if end <= start:
            end += 24 * 60
        return end - start


@dataclass(frozen=True)
class HolidayRange:
    """Department-wide closed period, inclusive on both ends."""

    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "end", to_date(self.end))
        if self.start > self.end:
            raise InvalidInput(f"Holiday range starts after it ends: {self}.")

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class LeaveRange:
    """Approved leave for one staff member, inclusive on both ends."""

    staff_id: str
    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "staff_id", str(self.staff_id))
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "end", to_date(self.end))
        if self.start > self.end:
            raise InvalidInput(f"Leave range starts after it ends: {self}.")

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end


class WorkingDayCalendar:
    """
    Weekday -> open mapping, keyed 0=Sunday .. 6=Saturday.

    Two modes:
      - unconfigured (days=None): every weekday is open.
      - explicit (a mapping): weekdays absent from the mapping are closed.
    """

    def __init__(self, days: Optional[Mapping[int, bool]] = None) -> None:
        if days is None:
            self._days: Optional[dict[int, bool]] = None
            return
        parsed: dict[int, bool] = {}
        for key, val in days.items():
            try:
                wd = int(key)
            except (TypeError, ValueError) as exc:
                raise InvalidInput(f"Invalid weekday key {key!r}.") from exc
            if not (0 <= wd <= 6):
                raise InvalidInput(f"Weekday keys must be within [0, 6]; got {wd}.")
            parsed[wd] = bool(val)
        self._days = parsed

    @property
    def configured(self) -> bool:
        return self._days is not None

    def is_open(self, day: date) -> bool:
        return self.is_open_weekday(weekday_index(day))

    def as_dict(self) -> dict[int, bool]:
        return {wd: self.is_open_weekday(wd) for wd in range(7)}

    def is_open_weekday(self, wd: int) -> bool:
        if self._days is None:
            return True
        return self._days.get(wd, False)

    def __repr__(self) -> str:
        mode = "explicit" if self.configured else "unconfigured"
        return f"WorkingDayCalendar({mode}, {self.as_dict()})"


def weekday_index(day: date) -> int:
    """Weekday with Sunday as 0 (Monday=1 .. Saturday=6)."""
    return day.isoweekday() % 7


@dataclass
class InputData:
    """Pre-fetched, read-only snapshot of everything a solve consumes."""

    department_id: str
    month: MonthLike
    shifts: list[ShiftDefinition]
    staff: list[StaffMember]
    calendar: WorkingDayCalendar = field(default_factory=WorkingDayCalendar)
    holidays: list[HolidayRange] = field(default_factory=list)
    leaves: list[LeaveRange] = field(default_factory=list)

    def validate(self) -> tuple[int, int]:
        """Fail fast on structural problems; returns the parsed (year, month)."""
        ym = parse_month(self.month)
        seen_shifts: set[str] = set()
        for sh in self.shifts:
            if not isinstance(sh, ShiftDefinition):
                raise InvalidInput(f"Expected ShiftDefinition, got {type(sh)!r}.")
            if sh.id in seen_shifts:
                raise InvalidInput(f"Duplicate shift id '{sh.id}'.")
            seen_shifts.add(sh.id)
        seen_staff: set[str] = set()
        for st in self.staff:
            if not isinstance(st, StaffMember):
                raise InvalidInput(f"Expected StaffMember, got {type(st)!r}.")
            if st.id in seen_staff:
                raise InvalidInput(f"Duplicate staff id '{st.id}'.")
            seen_staff.add(st.id)
        if not isinstance(self.calendar, WorkingDayCalendar):
            raise InvalidInput("calendar must be a WorkingDayCalendar.")
        return ym
