# shiftroster/model.py
from __future__ import annotations

from shiftroster.config import Config
from shiftroster.extract import (
    assignments_frame,
    emit_assignments,
    staff_totals_frame,
    unfilled_frame,
)
from shiftroster.input_data import InputData
from shiftroster.month_calendar import month_label, working_dates
from shiftroster.precheck import precheck_availability
from shiftroster.result_types import SolveResult
from shiftroster.rules.fairness import role_slot_totals, role_targets
from shiftroster.rules.registry import EligibilityFilter
from shiftroster.solver import assign_month
from shiftroster.staff import Role, split_by_role
from shiftroster.state import SolveState


class RosterModel:
    """
    Thin orchestrator around:
      - precheck_availability() -> supply vs. required slots per role
      - working_dates()         -> calendar resolution
      - assign_month()          -> greedy fill over a fresh SolveState
      - extraction helpers      -> Assignment list + pandas DataFrames
    """

    def __init__(self, cfg: Config, data: InputData):
        self.cfg = cfg
        self.data = data

    # ---------- Precheck ----------
    def precheck(self, verbose: bool = True):
        return precheck_availability(self.data, verbose=verbose)

    # ---------- Solve ----------
    def solve(self) -> SolveResult:
        """
        Validate the snapshot, then run one greedy pass over the month.

        Raises InvalidInput (or InvalidMonth) before any assignment work when the
        snapshot is malformed. Understaffing is not an error: empty slots are
        reported in `df_unfilled` and by `unfilled_count`.

        Returns:
        SolveResult: assignments in decision order plus DataFrame views
        """
        self.data.validate()
        data = self.data

        days = working_dates(data.month, data.calendar, data.holidays)
        shifts = list(data.shifts)
        staff = list(data.staff)
        staff_by_role = split_by_role(staff)
        targets = role_targets(days, shifts, staff_by_role)

        state = SolveState(
            data.department_id,
            leaves=data.leaves,
            targets=targets,
            debug=self.cfg.DEBUG,
        )
        state.log(
            f"inputs: role_a={len(staff_by_role[Role.A])} "
            f"role_b={len(staff_by_role[Role.B])} shifts={len(shifts)} "
            f"month={month_label(data.month)} working_days={len(days)} "
            f"targets=A:{targets[Role.A]},B:{targets[Role.B]}"
        )
        assign_month(
            state, days, shifts, staff_by_role, self.cfg, EligibilityFilter(state)
        )

        assignments = emit_assignments(state)
        df_assign = assignments_frame(assignments, shifts, staff)
        return SolveResult(
            department_id=data.department_id,
            month=month_label(data.month),
            assignments=assignments,
            df_assign=df_assign,
            df_staff=staff_totals_frame(df_assign, shifts, staff),
            df_unfilled=unfilled_frame(state),
            targets=targets,
            required_slots=sum(role_slot_totals(days, shifts).values()),
            working_days=days,
        )
