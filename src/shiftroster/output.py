from __future__ import annotations

from collections import defaultdict
from pathlib import Path

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.patches import Patch

from shiftroster.config import Config
from shiftroster.input_data import InputData
from shiftroster.month_calendar import month_days
from shiftroster.result_types import SolveResult
from shiftroster.staff import StaffMember


def roster_grid(res: SolveResult, data: InputData) -> pd.DataFrame:
    """
    Staff x date grid of shift names ('' where the member is off).

    Rows follow roster order and are labelled by name (duplicates suffixed);
    columns are every calendar day of the month.
    """
    dates = [d.isoformat() for d in month_days(data.month)]
    labels = _staff_labels(data.staff)
    grid = pd.DataFrame("", index=pd.Index(labels, name="staff"), columns=dates)
    if res.df_assign.empty:
        return grid

    label_of = dict(zip((s.id for s in data.staff), labels))
    cells = (
        res.df_assign.groupby(["staff_id", "date"])["shift_name"]
        .agg(lambda names: "/".join(names))
        .reset_index()
    )
    for _, r in cells.iterrows():
        label = label_of.get(r["staff_id"])
        if label is not None and r["date"] in grid.columns:
            grid.at[label, r["date"]] = r["shift_name"]
    return grid


def produce_outputs(res: SolveResult, cfg: Config, data: InputData) -> None:
    """Persist assignment/grid/totals CSVs plus a roster chart for solved months."""
    out_dir = Path(cfg.OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    res.df_assign.to_csv(out_dir / "assignments.csv", index=False)
    res.df_staff.to_csv(out_dir / "staff_totals.csv", index=False)
    res.df_unfilled.to_csv(out_dir / "unfilled_slots.csv", index=False)
    roster_grid(res, data).to_csv(out_dir / "roster_grid.csv")

    if cfg.ENABLE_PLOTS and not res.df_assign.empty:
        _export_roster_chart(res, data, out_dir / "roster_chart.png")


def _staff_labels(staff: list[StaffMember]) -> list[str]:
    counts: dict[str, int] = defaultdict(int)
    labels: list[str] = []
    for i, member in enumerate(staff):
        base = member.name or f"Staff {i}"
        counts[base] += 1
        labels.append(base if counts[base] == 1 else f"{base} ({counts[base]})")
    return labels


def _export_roster_chart(res: SolveResult, data: InputData, out_path: Path) -> None:
    staff = list(data.staff)
    labels = _staff_labels(staff)
    shift_ids = [sh.id for sh in data.shifts]
    cmap = plt.get_cmap("tab10")
    color_of = {sid: cmap(i % cmap.N) for i, sid in enumerate(shift_ids)}
    name_of = {sh.id: sh.name for sh in data.shifts}
    row_of = {s.id: i for i, s in enumerate(staff)}

    fig_height = 2 + len(staff) * 0.3
    fig, ax = plt.subplots(figsize=(10, fig_height), dpi=150)
    y_positions = list(range(len(staff)))[::-1]

    for _, r in res.df_assign.iterrows():
        i = row_of.get(r["staff_id"])
        if i is None:
            continue
        day = pd.Timestamp(r["date"])
        ax.barh(
            y_positions[i],
            width=1.0,
            left=mdates.date2num(day),
            height=0.8,
            color=color_of.get(r["shift_id"], "#94a3b8"),
            linewidth=0,
            zorder=3,
        )

    ax.set_yticks(y_positions, [f"{lbl} [{s.role.value}]" for lbl, s in zip(labels, staff)])
    days = month_days(data.month)
    ax.set_xlim(
        mdates.date2num(pd.Timestamp(days[0])),
        mdates.date2num(pd.Timestamp(days[-1]) + pd.Timedelta(days=1)),
    )
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%d"))
    ax.xaxis.set_major_locator(mdates.DayLocator())
    ax.set_xlabel("Day of month")
    ax.set_title(f"Roster {res.month} (department {res.department_id})", fontsize=11)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)

    handles = [Patch(facecolor=color_of[sid], label=name_of[sid]) for sid in shift_ids]
    ax.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.12),
        ncol=min(len(handles), 4),
        frameon=False,
    )
    fig.tight_layout()
    fig.savefig(out_path, dpi=fig.dpi, bbox_inches="tight")
    plt.close(fig)
