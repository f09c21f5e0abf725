from __future__ import annotations

from shiftroster.config import Config
from shiftroster.input_data import InputData, LeaveRange, ShiftDefinition
from shiftroster.model import RosterModel
from shiftroster.reporting.metrics import (
    compute_coverage_metrics,
    compute_role_fairness,
    daily_coverage,
    shift_type_spread,
)
from shiftroster.staff import Role, StaffMember


def make_result(n_b: int = 2, leaves=()):
    shifts = [
        ShiftDefinition(id="M", name="Morning", required_a=1, required_b=1),
        ShiftDefinition(id="E", name="Evening", start_time="16:00", required_a=1, required_b=0),
    ]
    staff = [StaffMember(id=f"a{i}", name=f"A{i}", role=Role.A) for i in range(4)]
    staff += [StaffMember(id=f"b{i}", name=f"B{i}", role=Role.B) for i in range(n_b)]
    data = InputData("D1", "2025-02", shifts, staff, leaves=list(leaves))
    return RosterModel(Config(), data).solve()


def test_coverage_metrics_count_every_slot():
    cov = compute_coverage_metrics(make_result())
    assert cov.required_slots == 28 * 3
    assert cov.filled_slots == 84
    assert cov.unfilled_slots == 0
    assert cov.fill_rate == 1.0
    assert cov.working_days == 28
    by_role = {rc.role: rc for rc in cov.per_role}
    assert by_role["A"].required == 56
    assert by_role["B"].filled == 28


def test_coverage_metrics_with_missing_role():
    cov = compute_coverage_metrics(make_result(n_b=0))
    assert cov.unfilled_slots == 28
    assert cov.days_with_gaps == 28
    assert {rc.role: rc.unfilled for rc in cov.per_role} == {"A": 0, "B": 28}


def test_role_fairness_spread_against_allowance():
    res = make_result()
    fair = {rf.role: rf for rf in compute_role_fairness(res, max_diff=1)}
    assert fair["A"].target == 14
    assert fair["A"].spread <= 1
    assert fair["A"].within_max_diff
    assert fair["B"].min_shifts + fair["B"].max_shifts == 28


def test_role_fairness_skips_roles_without_staff():
    fair = compute_role_fairness(make_result(n_b=0), max_diff=1)
    assert [rf.role for rf in fair] == ["A"]


def test_shift_type_spread_and_daily_coverage():
    res = make_result(
        leaves=[LeaveRange(staff_id="b0", start="2025-02-01", end="2025-02-28"),
                LeaveRange(staff_id="b1", start="2025-02-01", end="2025-02-01")]
    )
    spread = shift_type_spread(res)
    assert list(spread.columns) == ["role", "shift_id", "min", "max", "spread"]
    assert set(spread["shift_id"]) == {"M", "E"}

    daily = daily_coverage(res)
    assert len(daily) == 28
    assert daily.loc["2025-02-01", "unfilled"] == 1
    assert daily.loc["2025-02-01", "filled"] == 2
    assert int(daily["filled"].sum()) == res.filled_slots
