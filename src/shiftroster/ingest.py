# shiftroster/ingest.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from shiftroster.errors import InvalidInput
from shiftroster.input_data import (
    HolidayRange,
    InputData,
    LeaveRange,
    ShiftDefinition,
    WorkingDayCalendar,
)
from shiftroster.staff import Role, StaffMember

# Position labels recognised as the support role; anything else is primary.
ROLE_B_LABELS: frozenset[str] = frozenset({"assistant", "ผู้ช่วยพยาบาล", "ผู้ช่วย"})
ROLE_B_MARKER = "ผู้ช่วย"

ROLE_CODES: frozenset[str] = frozenset(r.value for r in Role)

DEFAULT_MAX_DIFF = 1

WorkingDayRows = Iterable[tuple[int, bool]]
WorkingDayFallback = Callable[[str], Optional[Mapping[int, bool]]]


def role_from_position(position: str | None) -> Role:
    """
    Map a free-text position label to a Role.

    'assistant' (any case) and labels containing 'ผู้ช่วย' are role B; every
    other label, including empty ones, defaults to role A.
    """
    label = (position or "").strip()
    if label.lower() in ROLE_B_LABELS or ROLE_B_MARKER in label:
        return Role.B
    return Role.A


def working_calendar_from_records(
    rows: WorkingDayRows,
    department_id: str = "",
    fallback: WorkingDayFallback | None = None,
) -> WorkingDayCalendar:
    """
    Build a WorkingDayCalendar from (day_of_week, is_working_day) rows.

    - any rows -> explicit mode (weekdays without a row are closed)
    - no rows  -> ask `fallback(department_id)` (e.g. a settings service);
                  if that yields nothing, every weekday is open
    """
    parsed = {int(d): bool(w) for d, w in rows}
    if parsed:
        return WorkingDayCalendar(parsed)
    if fallback is not None:
        remote = fallback(department_id)
        if remote:
            return WorkingDayCalendar(dict(remote))
    return WorkingDayCalendar(None)


def max_diff_from_priority(value: Any) -> int:
    """Department fairness tuning: accepted only within [0, 5], else the default 1."""
    if value is None or isinstance(value, bool):
        return DEFAULT_MAX_DIFF
    try:
        v = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_DIFF
    return v if 0 <= v <= 5 else DEFAULT_MAX_DIFF


def staff_from_records(entries: Sequence[Mapping[str, Any]]) -> list[StaffMember]:
    """
    Staff directory rows -> StaffMember.

    An explicit 'role' of A or B wins over 'position'. Any other role label
    (e.g. "nurse", "assistant") is mapped the same way a position is.
    """
    out: list[StaffMember] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError("Each staff entry must be an object/dict.")
        position = str(raw.get("position", "") or "")
        label = str(raw.get("role") or "").strip()
        if label.upper() in ROLE_CODES:
            role = Role(label.upper())
        else:
            role = role_from_position(label or position)
        out.append(
            StaffMember(
                id=_required(raw, "id"),
                name=str(raw.get("name", "")),
                role=role,
                position=position,
            )
        )
    return out


def shifts_from_records(
    entries: Sequence[Mapping[str, Any]], department_id: str = ""
) -> list[ShiftDefinition]:
    """Shift catalog rows -> ShiftDefinition; inactive rows are skipped."""
    out: list[ShiftDefinition] = []
    for raw in entries:
        if not isinstance(raw, Mapping):
            raise TypeError("Each shift entry must be an object/dict.")
        if not raw.get("active", True):
            continue
        out.append(
            ShiftDefinition(
                id=_required(raw, "id"),
                name=str(raw.get("name", "")),
                start_time=str(raw.get("start_time", "00:00")),
                end_time=str(raw.get("end_time", "00:00")),
                required_a=_to_int(raw.get("required_a", 0), "required_a"),
                required_b=_to_int(raw.get("required_b", 0), "required_b"),
                department_id=str(raw.get("department_id", department_id)),
            )
        )
    return out


def input_from_json(path: str | Path, month: str | None = None) -> tuple[InputData, int]:
    """
    Load a department/month snapshot from a JSON file on disk.

    Expected keys: department_id, month (optional when `month` is passed),
    shifts, staff, working_days (list of {day_of_week, is_working_day} or a
    {weekday: bool} object; omit for the open-every-day default), holidays,
    leaves and optionally max_diff_allowed.

    Returns the InputData plus the resolved fairness tuning value.
    """
    file_path = Path(path).expanduser()
    if file_path.suffix.lower() != ".json":
        raise ValueError("input_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Snapshot JSON file not found: {file_path}")
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc
    if not isinstance(raw, Mapping):
        raise TypeError("Snapshot JSON must be an object.")

    department_id = str(raw.get("department_id", ""))
    month_value = month or raw.get("month")
    if not month_value:
        raise InvalidInput("Snapshot has no 'month' and none was given.")

    data = InputData(
        department_id=department_id,
        month=str(month_value),
        shifts=shifts_from_records(raw.get("shifts", []), department_id),
        staff=staff_from_records(raw.get("staff", [])),
        calendar=_calendar_from_json(raw.get("working_days")),
        holidays=[
            HolidayRange(start=h["start"], end=h["end"])
            for h in raw.get("holidays", [])
        ],
        leaves=[
            LeaveRange(staff_id=lv["staff_id"], start=lv["start"], end=lv["end"])
            for lv in raw.get("leaves", [])
        ],
    )
    return data, max_diff_from_priority(raw.get("max_diff_allowed"))


def _calendar_from_json(value: Any) -> WorkingDayCalendar:
    if not value:
        return WorkingDayCalendar(None)
    if isinstance(value, Mapping):
        return WorkingDayCalendar({int(k): bool(v) for k, v in value.items()})
    rows = [(int(r["day_of_week"]), bool(r["is_working_day"])) for r in value]
    return working_calendar_from_records(rows)


def _required(raw: Mapping[str, Any], field: str) -> str:
    value = raw.get(field)
    if value in (None, ""):
        raise ValueError(f"Entry missing '{field}'.")
    return str(value)


def _to_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for '{field}': {value!r}") from exc
