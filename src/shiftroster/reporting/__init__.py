from __future__ import annotations

from .data_models import CoverageMetrics, RoleCoverage, RoleFairness
from .reporter import Reporter

__all__ = [
    "Reporter",
    "CoverageMetrics",
    "RoleCoverage",
    "RoleFairness",
]
