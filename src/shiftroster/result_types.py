# shiftroster/result_types.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pandas as pd

from shiftroster.staff import Role


def new_assignment_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Assignment:
    """One staff member working one shift on one date."""

    staff_id: str
    shift_id: str
    date: date
    department_id: str
    status: str = "assigned"
    role: Optional[Role] = None
    id: str = field(default_factory=new_assignment_id, compare=False)


@dataclass(frozen=True)
class UnfilledSlot:
    """A required role slot that no eligible candidate could take."""

    date: date
    shift_id: str
    role: Role


@dataclass
class SolveResult:
    """Structured output of a solve run."""

    department_id: str
    month: str
    assignments: list[Assignment]
    df_assign: pd.DataFrame
    df_staff: pd.DataFrame
    df_unfilled: pd.DataFrame
    targets: dict[Role, int]
    required_slots: int
    working_days: list[date] = field(default_factory=list)

    @property
    def filled_slots(self) -> int:
        return len(self.assignments)

    @property
    def unfilled_count(self) -> int:
        return max(self.required_slots - self.filled_slots, 0)
