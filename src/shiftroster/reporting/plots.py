from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from shiftroster.result_types import SolveResult
from shiftroster.staff import Role

from .metrics import daily_coverage
from .text_report import get_active_report

ROLE_COLORS = {Role.A.value: "tab:blue", Role.B.value: "tab:orange"}


def _save_and_show(fig: plt.Figure, out_dir: Path, filename: str) -> None:
    """Persist the plot under the output dir and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_staff_load(
    res: SolveResult, out_dir: Path, enable_plot: bool = True
) -> None:
    """Bar chart of shifts per staff member, coloured by role, with role targets."""
    if not enable_plot or res.df_staff.empty:
        return

    df = res.df_staff
    fig, ax = plt.subplots(figsize=(max(6.0, 0.35 * len(df) + 2), 4), dpi=150)
    ax.set_title(f"Shifts per staff member ({res.month})", pad=25)
    x = list(range(len(df)))
    ax.bar(
        x,
        df["shifts"].astype(int).tolist(),
        color=[ROLE_COLORS.get(r, "tab:gray") for r in df["role"]],
        width=0.8,
        edgecolor="none",
    )
    for role in Role:
        if (df["role"] == role.value).any():
            ax.axhline(
                res.targets.get(role, 0),
                color=ROLE_COLORS[role.value],
                linestyle="--",
                linewidth=1,
                label=f"target role {role.value}",
            )
    ax.set_xticks(x, df["staff_id"].tolist(), rotation=90, fontsize=7)
    ax.set_xlabel("Staff")
    ax.set_ylabel("Shifts assigned")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="upper center", bbox_to_anchor=(0.5, 1.12), ncol=2, frameon=False)
    fig.tight_layout()
    _save_and_show(fig, out_dir, "staff_load.png")


def show_daily_coverage(
    res: SolveResult, out_dir: Path, enable_plot: bool = True
) -> None:
    """Stacked bars of filled vs unfilled slots per working day."""
    if not enable_plot or not res.working_days:
        return

    cov = daily_coverage(res)
    labels = [d[-2:] for d in cov.index]
    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Slot coverage by working day", pad=25)
    ax.bar(labels, cov["filled"], color="tab:green", label="Filled", width=0.9)
    ax.bar(
        labels,
        cov["unfilled"],
        bottom=cov["filled"],
        color="tab:red",
        label="Unfilled",
        width=0.9,
    )
    ax.set_xlabel("Day of month")
    ax.set_ylabel("Slots")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(loc="upper center", bbox_to_anchor=(0.5, 1.12), ncol=2, frameon=False)
    fig.tight_layout()
    _save_and_show(fig, out_dir, "daily_coverage.png")
