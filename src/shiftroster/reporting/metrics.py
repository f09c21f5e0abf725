from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from shiftroster.result_types import SolveResult
from shiftroster.staff import Role

from .data_models import CoverageMetrics, RoleCoverage, RoleFairness


def compute_coverage_metrics(res: SolveResult) -> CoverageMetrics:
    """Every required slot is either an assignment or an unfilled record."""
    filled_by_role = _count_by(res.df_assign, "role")
    unfilled_by_role = _count_by(res.df_unfilled, "role")

    per_role = tuple(
        RoleCoverage(
            role=role.value,
            required=filled_by_role.get(role.value, 0)
            + unfilled_by_role.get(role.value, 0),
            filled=filled_by_role.get(role.value, 0),
            unfilled=unfilled_by_role.get(role.value, 0),
        )
        for role in Role
    )
    days_with_gaps = (
        int(res.df_unfilled["date"].nunique()) if not res.df_unfilled.empty else 0
    )
    return CoverageMetrics(
        required_slots=int(res.required_slots),
        filled_slots=res.filled_slots,
        unfilled_slots=res.unfilled_count,
        working_days=len(res.working_days),
        days_with_gaps=days_with_gaps,
        per_role=per_role,
    )


def compute_role_fairness(res: SolveResult, max_diff: int) -> list[RoleFairness]:
    """
    Min/max/mean shift counts per role from the staff totals table.
    Roles without staff are skipped.
    """
    out: list[RoleFairness] = []
    df = res.df_staff
    for role in Role:
        counts = (
            df.loc[df["role"] == role.value, "shifts"].to_numpy(dtype=int)
            if not df.empty
            else np.zeros(0, dtype=int)
        )
        if counts.size == 0:
            continue
        mn, mx = int(counts.min()), int(counts.max())
        out.append(
            RoleFairness(
                role=role.value,
                staff_count=int(counts.size),
                target=int(res.targets.get(role, 0)),
                min_shifts=mn,
                max_shifts=mx,
                mean_shifts=float(np.mean(counts)),
                spread=mx - mn,
                within_max_diff=(mx - mn) <= max_diff,
            )
        )
    return out


def shift_type_spread(res: SolveResult) -> pd.DataFrame:
    """
    Per role and shift type: min/max count per person and their spread.
    Columns: role, shift_id, min, max, spread.
    """
    df = res.df_staff
    shift_cols = [c for c in df.columns if str(c).startswith("n_")]
    rows: list[dict[str, Any]] = []
    for role in Role:
        sub = df[df["role"] == role.value]
        if sub.empty:
            continue
        for col in shift_cols:
            vals = sub[col].to_numpy(dtype=int)
            rows.append(
                {
                    "role": role.value,
                    "shift_id": col[2:],
                    "min": int(vals.min()),
                    "max": int(vals.max()),
                    "spread": int(vals.max() - vals.min()),
                }
            )
    return pd.DataFrame(rows, columns=["role", "shift_id", "min", "max", "spread"])


def daily_coverage(res: SolveResult) -> pd.DataFrame:
    """Filled and unfilled slot counts per working day (index: ISO date)."""
    days = [d.isoformat() for d in res.working_days]
    filled = (
        res.df_assign.groupby("date").size()
        if not res.df_assign.empty
        else pd.Series(dtype=int)
    )
    unfilled = (
        res.df_unfilled.groupby("date").size()
        if not res.df_unfilled.empty
        else pd.Series(dtype=int)
    )
    out = pd.DataFrame(
        {
            "filled": filled.reindex(days, fill_value=0),
            "unfilled": unfilled.reindex(days, fill_value=0),
        },
        index=pd.Index(days, name="date"),
    )
    return out.astype(int)


def _count_by(df: pd.DataFrame, column: str) -> dict[str, int]:
    if df.empty or column not in df.columns:
        return {}
    return {str(k): int(v) for k, v in df[column].value_counts().items()}
