from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from shiftroster.config import Config
from shiftroster.input_data import InputData
from shiftroster.precheck import precheck_availability
from shiftroster.result_types import SolveResult
from shiftroster.staff import Role

from .metrics import compute_coverage_metrics, compute_role_fairness, shift_type_spread


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None or pd.isna(x):
        return "nan"
    return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"


def _print_shift_histogram(df_staff: pd.DataFrame) -> None:
    if df_staff.empty or "shifts" not in df_staff.columns:
        _log_print("\nShift-count distribution: (no data)")
        return
    for role, sub in df_staff.groupby("role", sort=True):
        counts = sub["shifts"].astype(int).value_counts().sort_index()
        _log_print(f"\nShift-count distribution — role {role}:")
        for n_shifts, n_staff in counts.items():
            bar = "█" * min(int(n_staff), 50)
            _log_print(f"  {n_shifts:>3} shifts : {n_staff:>4} staff  {bar}")


def render_text_report(
    cfg: Config,
    res: SolveResult,
    data: InputData,
    *,
    num_print_examples: int = 6,
) -> None:
    _log_print(
        f"Roster {res.month} | department {res.department_id or '-'} | "
        f"working days: {len(res.working_days)}"
    )
    cov = compute_coverage_metrics(res)
    _log_print(
        f"Filled {cov.filled_slots:,} of {cov.required_slots:,} required slots "
        f"({_fmt_float(cov.fill_rate, nd=1, as_pct=True)})"
    )
    for rc in cov.per_role:
        _log_print(
            f"  role {rc.role}: filled {rc.filled:,} / {rc.required:,}"
            f" | unfilled {rc.unfilled:,} | target per person {_target(res, rc.role)}"
        )

    if cov.unfilled_slots > 0:
        _log_print(
            f"\n⚠️ {cov.unfilled_slots:,} of {cov.required_slots:,} slots unfilled "
            f"across {cov.days_with_gaps} day(s)."
        )
        _log_print(res.df_unfilled.head(num_print_examples).to_string(index=False))
        if cov.filled_slots == 0:
            _print_precheck_summary(data)
    elif cov.required_slots == 0:
        _log_print("\nNo slots required this month (no working days or no shift demand).")
    else:
        _log_print("\nAll required slots filled.")

    if res.df_staff.empty:
        return

    _log_print(f"\nPer-staff totals (top {num_print_examples} by shifts):")
    _log_print(
        res.df_staff.sort_values("shifts", ascending=False, kind="stable")
        .head(num_print_examples)
        .to_string(index=False)
    )

    _log_print(f"\nFairness (allowed spread per role: {cfg.MAX_DIFF_ALLOWED}):")
    for rf in compute_role_fairness(res, cfg.MAX_DIFF_ALLOWED):
        mark = "✅" if rf.within_max_diff else "⚠️"
        _log_print(
            f"{mark} role {rf.role}: staff={rf.staff_count} | target={rf.target} | "
            f"min={rf.min_shifts} | max={rf.max_shifts} | "
            f"mean={_fmt_float(rf.mean_shifts)} | spread={rf.spread}"
        )

    spread = shift_type_spread(res)
    if not spread.empty:
        wide = spread[spread["spread"] > cfg.MAX_DIFF_ALLOWED]
        if wide.empty:
            _log_print("Shift-type spread within allowance for every role.")
        else:
            _log_print("Shift types spread wider than the allowance:")
            _log_print(wide.to_string(index=False))

    hours = res.df_staff["hours"].to_numpy(dtype=float)
    if hours.size:
        _log_print(
            "\nHours across staff: "
            f"mean={_fmt_float(float(np.mean(hours)))} | "
            f"min={_fmt_float(float(np.min(hours)))} | "
            f"max={_fmt_float(float(np.max(hours)))}"
        )

    _print_shift_histogram(res.df_staff)


def _target(res: SolveResult, role_value: str) -> int:
    return int(res.targets.get(Role(role_value), 0))


def _print_precheck_summary(data: InputData) -> None:
    cap, dem, ok_cap, buckets, stats = precheck_availability(data, verbose=False)
    _log_print(
        f"Capacity upper bound = {sum(cap.values()):,} slots | "
        f"required = {sum(dem.values()):,} | "
        f"cap {'≥' if ok_cap else '<'} required"
    )
    for role, info in stats.items():
        if info["capacity"] >= info["required"] and not info["shortfall_days"]:
            continue
        _log_print(
            f"  - role {role.value}: required={info['required']:,}, "
            f"capacity={info['capacity']:,}, staff={info['staff_count']}, "
            f"short days={info['shortfall_days']}"
        )
        examples = buckets.get(role, [])[:5]
        if examples:
            _log_print(
                "      e.g. "
                + ", ".join(f"{d.isoformat()} (have {a})" for d, _, a in examples)
            )
