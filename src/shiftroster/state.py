# shiftroster/state.py
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

from shiftroster.input_data import LeaveRange, ShiftDefinition
from shiftroster.result_types import Assignment, UnfilledSlot
from shiftroster.staff import Role, StaffMember


class SolveState:
    """
    Mutable per-solve state shared by the eligibility rules, the fairness cost and
    the greedy assigner. One instance per solve; nothing here is process-wide.
    """

    def __init__(
        self,
        department_id: str,
        leaves: Iterable[LeaveRange] = (),
        targets: dict[Role, int] | None = None,
        debug: bool = False,
    ) -> None:
        self.department_id = department_id
        self.targets: dict[Role, int] = dict(targets or {})
        self.debug = debug

        # staff id -> approved leave ranges
        self.leaves: dict[str, list[LeaveRange]] = defaultdict(list)
        for lv in leaves:
            self.leaves[lv.staff_id].append(lv)

        # monotonic per-staff counters for the whole solve
        self.count: dict[str, int] = defaultdict(int)
        self.last_day: dict[str, date] = {}

        # date -> staff ids already working that date (same-day exclusivity)
        self.assigned_on: dict[date, set[str]] = defaultdict(set)

        # decision log, in decision order
        self.assignments: list[Assignment] = []
        self.unfilled: list[UnfilledSlot] = []

    # ----- reads used by rules -----
    def on_leave(self, staff_id: str, day: date) -> bool:
        return any(lv.covers(day) for lv in self.leaves.get(staff_id, ()))

    def assigned_that_day(self, staff_id: str, day: date) -> bool:
        return staff_id in self.assigned_on.get(day, ())

    def assigned_count(self, staff_id: str) -> int:
        return self.count.get(staff_id, 0)

    # ----- writes used by the assigner -----
    def commit(
        self, member: StaffMember, shift: ShiftDefinition, day: date, role: Role
    ) -> Assignment:
        """Record an assignment and update every counter the rules depend on."""
        a = Assignment(
            staff_id=member.id,
            shift_id=shift.id,
            date=day,
            department_id=self.department_id,
            role=role,
        )
        self.assignments.append(a)
        self.count[member.id] += 1
        self.assigned_on[day].add(member.id)
        self.last_day[member.id] = day
        return a

    def leave_unfilled(self, shift: ShiftDefinition, day: date, role: Role) -> None:
        self.unfilled.append(UnfilledSlot(date=day, shift_id=shift.id, role=role))

    def log(self, msg: str) -> None:
        if self.debug:
            print(f"[optimizer] {msg}")
