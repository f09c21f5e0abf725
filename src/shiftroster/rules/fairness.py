from __future__ import annotations

import math
from datetime import date
from typing import Mapping, Sequence

from shiftroster.input_data import ShiftDefinition
from shiftroster.rules.base import Rule
from shiftroster.staff import Role, StaffMember

UNDER_TARGET_WEIGHT = 5
OVER_TARGET_WEIGHT = 10


def required_for(shift: ShiftDefinition, role: Role) -> int:
    return shift.required_a if role is Role.A else shift.required_b


def role_slot_totals(
    days: Sequence[date], shifts: Sequence[ShiftDefinition]
) -> dict[Role, int]:
    """Total open slots per role across the working days of the month."""
    per_day = {role: sum(required_for(sh, role) for sh in shifts) for role in Role}
    return {role: per_day[role] * len(days) for role in Role}


def role_targets(
    days: Sequence[date],
    shifts: Sequence[ShiftDefinition],
    staff_by_role: Mapping[Role, Sequence[StaffMember]],
) -> dict[Role, int]:
    """
    Fair target per role: ceil(role slots / role headcount).

    A role without staff divides by 1; its slots simply cannot be filled.
    Example: 30 working days x 1 role-A slot with 5 role-A staff -> target 6.
    """
    totals = role_slot_totals(days, shifts)
    return {
        role: math.ceil(totals[role] / max(len(staff_by_role.get(role, ())), 1))
        for role in Role
    }


def fairness_cost(
    assigned: int,
    target: int,
    under_weight: int = UNDER_TARGET_WEIGHT,
    over_weight: int = OVER_TARGET_WEIGHT,
) -> int:
    """
    Asymmetric distance from the fair target.

      diff <= 0 -> diff * 5       (0, -5, -10, ...; furthest under target wins)
      diff  > 0 -> diff**2 * 10   (10, 40, 90, ...; quadratic over-target penalty)
    """
    diff = assigned - target
    if diff <= 0:
        return diff * under_weight
    return diff * diff * over_weight


class FairnessRule(Rule):
    """
    Objective-only rule: prefer the candidate whose cumulative shift count is
    furthest under the role's fair target. Never rejects a candidate; the
    target is a reference point, not a cap.

    Settings (RuleSpec.settings):
      - under_weight: multiplier below target (default 5)
      - over_weight:  multiplier on the squared excess (default 10)
    """

    order = 90
    name = "fairness"

    def cost(self, role: Role, staff_id: str) -> int:
        target = self.state.targets.get(role, 0)
        return fairness_cost(
            self.state.assigned_count(staff_id),
            target,
            under_weight=int(self.setting("under_weight", UNDER_TARGET_WEIGHT)),
            over_weight=int(self.setting("over_weight", OVER_TARGET_WEIGHT)),
        )
