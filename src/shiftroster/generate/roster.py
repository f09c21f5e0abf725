# roster_generation.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import numpy as np
import pandas as pd

from shiftroster.generate.staff_names import FIRST_NAMES
from shiftroster.input_data import (
    InputData,
    LeaveRange,
    ShiftDefinition,
    WorkingDayCalendar,
)
from shiftroster.month_calendar import MonthLike, month_days, month_label
from shiftroster.staff import Role, StaffMember


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class RosterGenConfig:
    """
    Configuration for generation of a synthetic department roster.
    """

    n_role_a: int = 6
    n_role_b: int = 6

    # Per-person probability of taking one leave block in the month
    leave_rate: float = 0.25
    max_leave_days: int = 5

    # Weekdays open for scheduling (0=Sunday .. 6=Saturday); None = every day
    working_weekdays: Optional[tuple[int, ...]] = (1, 2, 3, 4, 5)

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.n_role_a < 0 or self.n_role_b < 0:
            raise ValueError("n_role_a and n_role_b must be >= 0.")
        if self.n_role_a + self.n_role_b <= 0:
            raise ValueError("At least one staff member is required.")
        if self.n_role_a + self.n_role_b > len(FIRST_NAMES):
            raise ValueError(
                f"Not enough FIRST_NAMES ({len(FIRST_NAMES)}) for "
                f"{self.n_role_a + self.n_role_b} staff."
            )
        if not (0.0 <= self.leave_rate <= 1.0):
            raise ValueError("leave_rate must be in [0,1].")
        if self.max_leave_days <= 0:
            raise ValueError("max_leave_days must be > 0.")
        if self.working_weekdays is not None and any(
            not (0 <= d <= 6) for d in self.working_weekdays
        ):
            raise ValueError("working_weekdays entries must be within [0, 6].")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def default_shifts(department_id: str = "D1") -> list[ShiftDefinition]:
    """Two daily shifts, each needing one role-A and one role-B staff member."""
    return [
        ShiftDefinition(
            id="S1",
            name="Morning",
            start_time="08:00",
            end_time="16:00",
            required_a=1,
            required_b=1,
            department_id=department_id,
        ),
        ShiftDefinition(
            id="S2",
            name="Evening",
            start_time="16:00",
            end_time="00:00",
            required_a=1,
            required_b=1,
            department_id=department_id,
        ),
    ]


# ----------------------------
# Core API
# ----------------------------
def create_staff(cfg: RosterGenConfig) -> list[StaffMember]:
    cfg.validate()
    g = _rng(cfg.seed)
    names = list(FIRST_NAMES)
    g.shuffle(names)

    staff: list[StaffMember] = []
    for i in range(cfg.n_role_a):
        staff.append(
            StaffMember(id=f"A{i + 1}", name=names[i], role=Role.A, position="nurse")
        )
    for j in range(cfg.n_role_b):
        staff.append(
            StaffMember(
                id=f"B{j + 1}",
                name=names[cfg.n_role_a + j],
                role=Role.B,
                position="assistant",
            )
        )
    return staff


def assign_leave(
    staff: list[StaffMember],
    month: MonthLike,
    leave_rate: float,
    max_leave_days: int,
    seed: Optional[int] = 7,
) -> list[LeaveRange]:
    """
    Randomly give some staff one contiguous leave block inside the month.
    """
    if not (0.0 <= leave_rate <= 1.0):
        raise ValueError("leave_rate must be in [0,1].")
    days = month_days(month)
    g = _rng(seed)
    leaves: list[LeaveRange] = []
    for s in staff:
        if g.random() >= leave_rate:
            continue
        length = int(g.integers(1, max_leave_days + 1))
        start_idx = int(g.integers(0, len(days)))
        start = days[start_idx]
        end = min(start + timedelta(days=length - 1), days[-1])
        leaves.append(LeaveRange(staff_id=s.id, start=start, end=end))
    return leaves


def build_demo_input(
    month: MonthLike,
    cfg: RosterGenConfig | None = None,
    department_id: str = "D1",
) -> InputData:
    """
    Build an InputData snapshot with synthetic staff, leave and two shifts.
    """
    gen_cfg = cfg or RosterGenConfig()
    gen_cfg.validate()

    staff = create_staff(gen_cfg)
    leaves = assign_leave(
        staff,
        month,
        leave_rate=gen_cfg.leave_rate,
        max_leave_days=gen_cfg.max_leave_days,
        seed=gen_cfg.seed,
    )
    calendar = (
        WorkingDayCalendar({d: True for d in gen_cfg.working_weekdays})
        if gen_cfg.working_weekdays is not None
        else WorkingDayCalendar(None)
    )
    return InputData(
        department_id=department_id,
        month=month_label(month),
        shifts=default_shifts(department_id),
        staff=staff,
        calendar=calendar,
        holidays=[],
        leaves=leaves,
    )


def staff_summary(staff: list[StaffMember]) -> dict:
    n = len(staff)
    n_a = sum(s.role is Role.A for s in staff)
    return {
        "N": n,
        "role_a": n_a,
        "role_b": n - n_a,
        "role_a_pct": n_a / n if n else 0.0,
    }


def staff_to_dataframe(staff: list[StaffMember]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"id": s.id, "name": s.name, "role": s.role.value, "position": s.position}
            for s in staff
        ]
    )
