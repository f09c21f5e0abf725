from datetime import date

from shiftroster.rules.base import Rule


class SameDayRule(Rule):
    """At most one assignment per staff member per calendar date."""

    order = 20
    name = "same-day"

    def allows(self, staff_id: str, day: date) -> bool:
        return not self.state.assigned_that_day(staff_id, day)
