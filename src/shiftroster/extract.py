# shiftroster/extract.py
from __future__ import annotations

from typing import Sequence

import pandas as pd

from shiftroster.input_data import ShiftDefinition
from shiftroster.result_types import Assignment
from shiftroster.staff import StaffMember
from shiftroster.state import SolveState

ASSIGN_COLUMNS = [
    "id",
    "date",
    "shift_id",
    "shift_name",
    "staff_id",
    "name",
    "role",
    "department_id",
    "status",
    "hours",
]


def emit_assignments(state: SolveState) -> list[Assignment]:
    """The decided assignments, in decision order (date, shift order, role order)."""
    return list(state.assignments)


def assignments_frame(
    assignments: Sequence[Assignment],
    shifts: Sequence[ShiftDefinition],
    staff: Sequence[StaffMember],
) -> pd.DataFrame:
    """Return one row per assignment, enriched with shift and staff labels."""
    shift_by_id = {sh.id: sh for sh in shifts}
    staff_by_id = {st.id: st for st in staff}
    rows: list[dict] = []
    for a in assignments:
        sh = shift_by_id.get(a.shift_id)
        st = staff_by_id.get(a.staff_id)
        role = a.role if a.role is not None else (st.role if st else None)
        rows.append(
            {
                "id": a.id,
                "date": a.date.isoformat(),
                "shift_id": a.shift_id,
                "shift_name": sh.name if sh else a.shift_id,
                "staff_id": a.staff_id,
                "name": st.name if st else a.staff_id,
                "role": role.value if role is not None else "",
                "department_id": a.department_id,
                "status": a.status,
                "hours": (sh.duration_minutes / 60.0) if sh else 0.0,
            }
        )
    if not rows:
        return pd.DataFrame(columns=ASSIGN_COLUMNS)
    return pd.DataFrame(rows, columns=ASSIGN_COLUMNS)


def staff_totals_frame(
    df_assign: pd.DataFrame,
    shifts: Sequence[ShiftDefinition],
    staff: Sequence[StaffMember],
) -> pd.DataFrame:
    """
    Per-staff totals: shift count, hours and one column per shift (shift-type load).
    Staff with zero assignments are included with zeros.
    """
    base = pd.DataFrame(
        {
            "staff_id": [st.id for st in staff],
            "name": [st.name for st in staff],
            "role": [st.role.value for st in staff],
        }
    )
    shift_cols = [f"n_{sh.id}" for sh in shifts]
    if df_assign.empty:
        for col in ["shifts", "hours", *shift_cols]:
            base[col] = 0
        base["hours"] = base["hours"].astype(float)
        return base

    totals = df_assign.groupby("staff_id").agg(
        shifts=("id", "count"), hours=("hours", "sum")
    )
    per_type = (
        df_assign.pivot_table(
            index="staff_id",
            columns="shift_id",
            values="id",
            aggfunc="count",
            fill_value=0,
        )
        .reindex(columns=[sh.id for sh in shifts], fill_value=0)
        .add_prefix("n_")
    )
    out = base.merge(totals, how="left", left_on="staff_id", right_index=True).merge(
        per_type, how="left", left_on="staff_id", right_index=True
    )
    out["shifts"] = out["shifts"].fillna(0).astype(int)
    out["hours"] = out["hours"].fillna(0.0).astype(float)
    for col in shift_cols:
        out[col] = out[col].fillna(0).astype(int)
    return out.reset_index(drop=True)


def unfilled_frame(state: SolveState) -> pd.DataFrame:
    """One row per slot that was left empty."""
    rows = [
        {"date": u.date.isoformat(), "shift_id": u.shift_id, "role": u.role.value}
        for u in state.unfilled
    ]
    return pd.DataFrame(rows, columns=["date", "shift_id", "role"])
