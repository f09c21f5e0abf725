from __future__ import annotations

import copy
from collections import Counter, defaultdict
from datetime import date, timedelta

import pytest

from shiftroster import solve
from shiftroster.config import Config
from shiftroster.errors import InvalidInput, InvalidMonth
from shiftroster.input_data import (
    HolidayRange,
    LeaveRange,
    ShiftDefinition,
    WorkingDayCalendar,
)
from shiftroster.solver import candidate_order
from shiftroster.staff import Role, StaffMember

MONTH = "2025-04"  # 30 days, starts on a Tuesday
MONTH_START = date(2025, 4, 1)
MONTH_END = date(2025, 4, 30)


def make_staff(n_a: int, n_b: int) -> list[StaffMember]:
    staff = [StaffMember(id=f"A{i}", name=f"Nurse {i}", role=Role.A) for i in range(1, n_a + 1)]
    staff += [
        StaffMember(id=f"B{i}", name=f"Assistant {i}", role=Role.B)
        for i in range(1, n_b + 1)
    ]
    return staff


def one_shift(required_a: int = 1, required_b: int = 1) -> list[ShiftDefinition]:
    return [
        ShiftDefinition(
            id="S1",
            name="Morning",
            start_time="08:00",
            end_time="16:00",
            required_a=required_a,
            required_b=required_b,
        )
    ]


def two_shifts() -> list[ShiftDefinition]:
    return [
        ShiftDefinition(id="M", name="Morning", start_time="08:00", end_time="16:00", required_a=1, required_b=1),
        ShiftDefinition(id="E", name="Evening", start_time="16:00", end_time="00:00", required_a=1, required_b=1),
    ]


def test_balanced_month_fills_every_slot_evenly():
    staff = make_staff(5, 5)
    out = solve("D1", MONTH, one_shift(), staff)

    assert len(out) == 60
    by_role = Counter(a.role for a in out)
    assert by_role == {Role.A: 30, Role.B: 30}
    counts = Counter(a.staff_id for a in out)
    assert set(counts) == {s.id for s in staff}
    assert all(abs(n - 6) <= 1 for n in counts.values())
    assert all(a.department_id == "D1" and a.status == "assigned" for a in out)


def test_everyone_on_leave_produces_no_assignments():
    staff = make_staff(2, 2)
    leaves = [LeaveRange(staff_id=s.id, start=MONTH_START, end=MONTH_END) for s in staff]
    assert solve("D1", MONTH, one_shift(), staff, leaves=leaves) == []


def test_understaffed_role_leaves_slots_empty_without_error():
    staff = make_staff(1, 0)
    out = solve("D1", MONTH, one_shift(required_a=2, required_b=0), staff)

    # one assignment per date at most, never on two adjacent dates
    dates = sorted(a.date for a in out)
    assert len(dates) == len(set(dates)) == 15
    assert all(d.day % 2 == 1 for d in dates)
    assert {a.staff_id for a in out} == {"A1"}


def test_weekends_closed_by_explicit_calendar():
    cal = WorkingDayCalendar({1: True, 2: True, 3: True, 4: True, 5: True})
    out = solve("D1", MONTH, one_shift(), make_staff(4, 4), calendar=cal)
    assert out
    assert all(a.date.weekday() < 5 for a in out)


def test_holiday_dates_get_no_assignments():
    holidays = [HolidayRange(start="2025-04-10", end="2025-04-12")]
    out = solve("D1", MONTH, one_shift(), make_staff(4, 4), holidays=holidays)
    closed = {date(2025, 4, 10), date(2025, 4, 11), date(2025, 4, 12)}
    assert not {a.date for a in out} & closed
    assert len(out) == 2 * 27


def test_staff_on_leave_is_skipped_for_covered_dates():
    staff = make_staff(3, 3)
    leave = LeaveRange(staff_id="A1", start="2025-04-01", end="2025-04-15")
    out = solve("D1", MONTH, one_shift(), staff, leaves=[leave])
    a1_dates = [a.date for a in out if a.staff_id == "A1"]
    assert a1_dates
    assert all(d > date(2025, 4, 15) for d in a1_dates)


def test_no_double_booking_adjacent_days_or_wrong_roles():
    staff = make_staff(6, 6)
    out = solve("D1", MONTH, two_shifts(), staff)
    role_of = {s.id: s.role for s in staff}

    worked: dict[str, set[date]] = defaultdict(set)
    for a in out:
        assert a.role is role_of[a.staff_id]
        assert a.date not in worked[a.staff_id], "double-booked on one date"
        worked[a.staff_id].add(a.date)

    for sid, days in worked.items():
        for d in days:
            assert d + timedelta(days=1) not in days, f"{sid} worked adjacent dates"

    per_slot = Counter((a.date, a.shift_id, a.role) for a in out)
    assert all(n <= 1 for n in per_slot.values())


def test_fairness_spread_stays_tight_for_divisible_month():
    out = solve("D1", MONTH, two_shifts(), make_staff(6, 6))
    counts = Counter(a.staff_id for a in out)
    for role in Role:
        role_counts = [n for sid, n in counts.items() if sid.startswith(role.value)]
        assert max(role_counts) - min(role_counts) <= 1


def test_output_order_follows_dates_shifts_then_roles():
    out = solve("D1", MONTH, two_shifts(), make_staff(6, 6))
    shift_rank = {"M": 0, "E": 1}
    role_rank = {Role.A: 0, Role.B: 1}
    keys = [(a.date, shift_rank[a.shift_id], role_rank[a.role]) for a in out]
    assert keys == sorted(keys)


def test_same_input_gives_same_assignments():
    staff = make_staff(5, 4)
    leaves = [LeaveRange(staff_id="B2", start="2025-04-08", end="2025-04-12")]
    first = solve("D1", MONTH, two_shifts(), staff, leaves=leaves)
    second = solve("D1", MONTH, two_shifts(), staff, leaves=leaves)
    assert first == second
    # ids are fresh per solve and not part of equality
    assert {a.id for a in first}.isdisjoint({a.id for a in second})


def test_inputs_are_not_mutated():
    staff = make_staff(3, 3)
    shifts = two_shifts()
    leaves = [LeaveRange(staff_id="A1", start="2025-04-02", end="2025-04-03")]
    holidays = [HolidayRange(start="2025-04-20", end="2025-04-20")]
    before = copy.deepcopy((staff, shifts, leaves, holidays))
    solve("D1", MONTH, shifts, staff, holidays=holidays, leaves=leaves)
    assert (staff, shifts, leaves, holidays) == before


def test_tie_break_by_staff_id():
    staff = [
        StaffMember(id="zed", name="Zed", role=Role.A),
        StaffMember(id="amy", name="Amy", role=Role.A),
    ]
    shifts = one_shift(required_a=1, required_b=0)
    by_roster = solve("D1", MONTH, shifts, staff)
    by_id = solve("D1", MONTH, shifts, staff, cfg=Config(TIE_BREAK="staff_id"))
    assert by_roster[0].staff_id == "zed"
    assert by_id[0].staff_id == "amy"
    assert [m.id for m in candidate_order(staff, "staff_id")] == ["amy", "zed"]


def test_unknown_tie_break_is_rejected_before_solving():
    staff = [StaffMember(id="zed", name="Zed", role=Role.A)]
    with pytest.raises(ValueError, match="TIE_BREAK"):
        solve("D1", MONTH, one_shift(1, 0), staff, cfg=Config(TIE_BREAK="bogus"))  # type: ignore[arg-type]


def test_zero_requirements_or_no_staff_give_empty_result():
    assert solve("D1", MONTH, one_shift(0, 0), make_staff(3, 3)) == []
    assert solve("D1", MONTH, one_shift(), []) == []
    assert solve("D1", MONTH, [], make_staff(3, 3)) == []


def test_malformed_month_fails_before_assignment():
    with pytest.raises(InvalidMonth):
        solve("D1", "2025-13", one_shift(), make_staff(1, 1))


def test_duplicate_staff_ids_are_rejected():
    staff = make_staff(1, 0) + make_staff(1, 0)
    with pytest.raises(InvalidInput):
        solve("D1", MONTH, one_shift(), staff)


def test_debug_trace_prints_optimizer_lines(capsys):
    staff = make_staff(1, 0)
    solve(
        "D1",
        MONTH,
        one_shift(required_a=1, required_b=0),
        staff,
        cfg=Config(DEBUG=True),
    )
    out = capsys.readouterr().out
    assert "[optimizer] inputs:" in out
    assert "reason=consecutive-day" in out
    assert "[optimizer] unfilled 2025-04-02" in out


def test_debug_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("SCHEDULE_DEBUG", "1")
    assert Config().DEBUG is True
    monkeypatch.setenv("SCHEDULE_DEBUG", "0")
    assert Config().DEBUG is False
