from datetime import date

from shiftroster.rules.base import Rule


class LeaveRule(Rule):
    """Reject staff with an approved leave range covering the date (any shift)."""

    order = 10
    name = "leave"

    def allows(self, staff_id: str, day: date) -> bool:
        return not self.state.on_leave(staff_id, day)
