# src/shiftroster/rules/base.py
from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from shiftroster.staff import Role
    from shiftroster.state import SolveState


@dataclass
class RuleSpec:
    cls: Type["Rule"]
    order: int | None = None
    enabled: bool = True
    settings: dict[str, Any] = field(default_factory=dict)


class Rule(ABC):
    """
    A rule contributes in two phases per candidate:
      1) allows()  hard eligibility check (False rejects the candidate)
      2) cost()    objective contribution (lower is preferred)
    Rules only read the SolveState; the assigner is the only writer.
    """

    order: int = 100
    enabled: bool = True
    name: str = "Rule"

    def __init__(self, state: SolveState, **settings: Any) -> None:
        self.state: SolveState = state
        self._settings: dict[str, Any] = settings

    def allows(self, staff_id: str, day: date) -> bool:
        return True

    def cost(self, role: Role, staff_id: str) -> int:
        return 0

    # Helper for subclasses to read optional settings
    def setting(self, key: str, default: Any) -> Any:
        return self._settings.get(key, default)
