from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleCoverage:
    """Required vs filled slots for one role across the month."""

    role: str
    required: int
    filled: int
    unfilled: int


@dataclass(frozen=True)
class CoverageMetrics:
    """Key coverage metrics summarising filled vs required role slots."""

    required_slots: int
    filled_slots: int
    unfilled_slots: int
    working_days: int
    days_with_gaps: int
    per_role: tuple[RoleCoverage, ...]

    @property
    def fill_rate(self) -> float:
        return self.filled_slots / self.required_slots if self.required_slots else 1.0


@dataclass(frozen=True)
class RoleFairness:
    """Spread of per-person shift counts within one role."""

    role: str
    staff_count: int
    target: int
    min_shifts: int
    max_shifts: int
    mean_shifts: float
    spread: int  # max_shifts - min_shifts
    within_max_diff: bool  # spread <= MAX_DIFF_ALLOWED
