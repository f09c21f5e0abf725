# shiftroster/precheck.py
from __future__ import annotations

import sys
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from shiftroster.input_data import InputData, LeaveRange
from shiftroster.month_calendar import working_dates
from shiftroster.rules.fairness import required_for
from shiftroster.staff import Role, StaffMember, split_by_role


def availability_matrix(
    staff: Sequence[StaffMember], days: Sequence[date], leaves: Sequence[LeaveRange]
) -> np.ndarray:
    """(n_staff, n_days) boolean array: True where the member is not on leave."""
    mat = np.ones((len(staff), len(days)), dtype=bool)
    row_of = {st.id: i for i, st in enumerate(staff)}
    for lv in leaves:
        i = row_of.get(lv.staff_id)
        if i is None:
            continue
        for j, d in enumerate(days):
            if lv.covers(d):
                mat[i, j] = False
    return mat


def max_non_adjacent_days(days: Sequence[date]) -> int:
    """
    Most dates one person could work from `days` without two calendar-adjacent
    dates. Taking the earliest free date each time is optimal on a line.
    """
    count = 0
    last: date | None = None
    for d in sorted(days):
        if last is not None and d - last <= timedelta(days=1):
            continue
        count += 1
        last = d
    return count


def _role_capacity(avail: np.ndarray, days: Sequence[date]) -> int:
    """Upper bound on slots a role can fill: Σ_staff max non-adjacent available days."""
    cap = 0
    for row in avail:
        own_days = [d for d, ok in zip(days, row) if ok]
        cap += max_non_adjacent_days(own_days)
    return cap


def precheck_availability(
    data: InputData,
    *,
    verbose: bool = True,
    examples_per_role: int = 3,
    stream=None,
) -> Tuple[
    Dict[Role, int],  # cap
    Dict[Role, int],  # dem
    bool,  # ok_cap
    Dict[Role, List[Tuple[date, int, int]]],  # buckets
    Dict[Role, Dict[str, Any]],  # role_stats
]:
    """
    Returns:
      cap[role]: slot *upper bound* the role's staff could fill over the month
                 (leave removed, at most one date in any two adjacent dates)
      dem[role]: required role slots over the working days
      ok_cap: cap >= dem for every role
      buckets[role]: (date, required, available) for dates with fewer
                     available staff than required slots that day
      role_stats[role]: {'required', 'capacity', 'staff_count', 'shortfall_days'}
    If `verbose` is True, prints a header and one status line per role.
    """
    stream = stream or sys.stdout
    days = working_dates(data.month, data.calendar, data.holidays)
    by_role = split_by_role(list(data.staff))

    cap: Dict[Role, int] = {}
    dem: Dict[Role, int] = {}
    buckets: Dict[Role, List[Tuple[date, int, int]]] = {}
    stats: Dict[Role, Dict[str, Any]] = {}

    for role in Role:
        members = by_role[role]
        per_day_req = sum(required_for(sh, role) for sh in data.shifts)
        avail = availability_matrix(members, days, data.leaves)
        available_per_day = avail.sum(axis=0) if members else np.zeros(len(days), int)

        dem[role] = per_day_req * len(days)
        cap[role] = _role_capacity(avail, days) if members else 0
        buckets[role] = [
            (d, per_day_req, int(n))
            for d, n in zip(days, available_per_day)
            if int(n) < per_day_req
        ]
        stats[role] = {
            "required": dem[role],
            "capacity": cap[role],
            "staff_count": len(members),
            "shortfall_days": len(buckets[role]),
        }

    ok_cap = all(cap[r] >= dem[r] for r in Role)
    if verbose:
        print_precheck_header(cap, dem, ok_cap, stream=stream)
        print_role_status(
            buckets, stats=stats, examples_per_role=examples_per_role, stream=stream
        )
    return cap, dem, ok_cap, buckets, stats


def print_precheck_header(
    cap: Dict[Role, int], dem: Dict[Role, int], ok_cap: bool, *, stream=sys.stdout
) -> None:
    """Print 'Pre-check' on its own line, then capacity line with ✅/❌"""
    print("\nPre-check:\n", file=stream)
    total_cap, total_dem = sum(cap.values()), sum(dem.values())
    mark = "✅" if ok_cap else "❌"
    verdict = "OK" if ok_cap else "NOT OK"
    print(
        f"{mark} Capacity = {total_cap:,} | required_slots = {total_dem:,} | {verdict}",
        file=stream,
    )
    print(
        "ℹ️  Pre-check only bounds raw supply; greedy order may still leave slots empty.",
        file=stream,
    )


def print_role_status(
    buckets: Dict[Role, List[Tuple[date, int, int]]],
    *,
    stats: Dict[Role, Dict[str, Any]],
    examples_per_role: int = 3,
    stream=sys.stdout,
) -> None:
    """One line per role; examples for days where headcount alone is short."""
    for role in Role:
        st = stats[role]
        suffix = (
            f" | requires {st['required']:,}, capacity {st['capacity']:,}"
            f" | staff: {st['staff_count']}"
        )
        if st["required"] == 0:
            print(f"✅ role {role.value} — no slots required{suffix}", file=stream)
            continue
        if st["staff_count"] == 0:
            print(
                f"❌ role {role.value} — slots required but no staff in this role{suffix}",
                file=stream,
            )
            continue
        slots = buckets.get(role, [])
        if not slots and st["capacity"] >= st["required"]:
            print(f"✅ role {role.value} — satisfied{suffix}", file=stream)
            continue
        n = len(slots)
        sample = ", ".join(
            f"{d.isoformat()} (need {r}, have {a})"
            for d, r, a in slots[:examples_per_role]
        )
        more = f", +{n - examples_per_role} more" if n > examples_per_role else ""
        print(
            f"❌ role {role.value} — {n} short day(s)"
            f"{(' — e.g. ' + sample + more) if sample else ''}"
            f"{suffix}",
            file=stream,
        )
