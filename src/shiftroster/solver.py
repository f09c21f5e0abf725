# shiftroster/solver.py
from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from shiftroster.config import Config
from shiftroster.input_data import ShiftDefinition
from shiftroster.rules.fairness import required_for
from shiftroster.rules.registry import EligibilityFilter
from shiftroster.staff import Role, StaffMember
from shiftroster.state import SolveState

ROLE_ORDER: tuple[Role, ...] = (Role.A, Role.B)


def candidate_order(
    members: Sequence[StaffMember], tie_break: str = "roster"
) -> list[StaffMember]:
    """Scan order for candidates; the first minimum-cost candidate wins ties."""
    if tie_break == "staff_id":
        return sorted(members, key=lambda m: m.id)
    return list(members)


def pick_candidate(
    flt: EligibilityFilter,
    role: Role,
    candidates: Sequence[StaffMember],
    day: date,
) -> Optional[StaffMember]:
    """Lowest-cost eligible candidate for one slot, or None if nobody qualifies."""
    best: Optional[StaffMember] = None
    best_cost = 0
    for member in candidates:
        if not flt.is_eligible(member.id, day):
            if flt.state.debug:
                flt.state.log(
                    f"block {member.name}({role.value}) {day.isoformat()} "
                    f"reason={flt.rejection_reason(member.id, day)}"
                )
            continue
        c = flt.cost(role, member.id)
        if best is None or c < best_cost:
            best, best_cost = member, c
    return best


def assign_month(
    state: SolveState,
    days: Sequence[date],
    shifts: Sequence[ShiftDefinition],
    staff_by_role: Mapping[Role, Sequence[StaffMember]],
    cfg: Config,
    flt: EligibilityFilter | None = None,
) -> SolveState:
    """
    Greedy fill: dates ascending -> shifts in input order -> role A then role B.

    Each slot takes the eligible candidate with the lowest fairness cost. A slot
    with no eligible candidate is recorded as unfilled and skipped; decisions are
    never revisited.
    """
    flt = flt or EligibilityFilter(state)
    ordered = {
        role: candidate_order(staff_by_role.get(role, ()), cfg.TIE_BREAK)
        for role in ROLE_ORDER
    }

    for day in days:
        for shift in shifts:
            for role in ROLE_ORDER:
                for _ in range(required_for(shift, role)):
                    chosen = pick_candidate(flt, role, ordered[role], day)
                    if chosen is None:
                        state.leave_unfilled(shift, day, role)
                        state.log(
                            f"unfilled {day.isoformat()} shift={shift.name} role={role.value}"
                        )
                        continue
                    state.commit(chosen, shift, day, role)
                    state.log(
                        f"assigned {chosen.name} on {day.isoformat()} shift={shift.name}"
                    )
    return state
