from __future__ import annotations

from datetime import date, timedelta

from shiftroster.rules.base import Rule


class ConsecutiveDaysRule(Rule):
    """
    No assignments on two calendar-adjacent dates.

    Adjacency is date arithmetic only (day - 1): the shift type and its time
    window do not matter, so an evening shift followed by a morning shift on the
    next date is rejected as well.
    """

    order = 30
    name = "consecutive-day"

    def allows(self, staff_id: str, day: date) -> bool:
        prev = self.state.last_day.get(staff_id)
        if prev is None:
            return True
        return prev + timedelta(days=1) != day
