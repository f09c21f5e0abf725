from __future__ import annotations

from datetime import date
from typing import Any, Sequence, Tuple, Type

from shiftroster.rules.availability import LeaveRule
from shiftroster.rules.base import Rule, RuleSpec
from shiftroster.rules.consecutive_days import ConsecutiveDaysRule
from shiftroster.rules.fairness import (
    OVER_TARGET_WEIGHT,
    UNDER_TARGET_WEIGHT,
    FairnessRule,
)
from shiftroster.rules.same_day import SameDayRule
from shiftroster.staff import Role
from shiftroster.state import SolveState

RuleTemplate = Tuple[Type[Rule], int, dict[str, Any]]

LEAVE_RULE_TEMPLATE: RuleTemplate = (LeaveRule, 10, {})
SAME_DAY_RULE_TEMPLATE: RuleTemplate = (SameDayRule, 20, {})
CONSECUTIVE_DAYS_RULE_TEMPLATE: RuleTemplate = (ConsecutiveDaysRule, 30, {})
FAIRNESS_RULE_TEMPLATE: RuleTemplate = (
    FairnessRule,
    90,
    {"under_weight": UNDER_TARGET_WEIGHT, "over_weight": OVER_TARGET_WEIGHT},
)

# The constraint set is fixed; order decides which reason debug tracing reports.
RULE_REGISTRY: tuple[RuleTemplate, ...] = (
    LEAVE_RULE_TEMPLATE,
    SAME_DAY_RULE_TEMPLATE,
    CONSECUTIVE_DAYS_RULE_TEMPLATE,
    FAIRNESS_RULE_TEMPLATE,
)


def default_rule_specs() -> list[RuleSpec]:
    """Return fresh copies of the default rule specifications."""
    return [
        RuleSpec(cls=cls, order=order, settings=dict(settings))
        for cls, order, settings in RULE_REGISTRY
    ]


def build_rules(state: SolveState, specs: Sequence[RuleSpec] | None = None) -> list[Rule]:
    """Instantiate enabled rules bound to `state`, sorted by order."""
    rules: list[tuple[int, Rule]] = []
    for spec in specs if specs is not None else default_rule_specs():
        if not spec.enabled:
            continue
        rule = spec.cls(state, **spec.settings)
        order = spec.order if spec.order is not None else rule.order
        rules.append((order, rule))
    rules.sort(key=lambda pair: pair[0])
    return [rule for _, rule in rules]


class EligibilityFilter:
    """
    Answers "may this staff member take a slot on this date?" and scores the
    candidates that may. Pure reads over the SolveState.
    """

    def __init__(self, state: SolveState, rules: Sequence[Rule] | None = None) -> None:
        self.state = state
        self.rules: list[Rule] = list(rules) if rules is not None else build_rules(state)

    def is_eligible(self, staff_id: str, day: date) -> bool:
        return all(r.allows(staff_id, day) for r in self.rules)

    def rejection_reason(self, staff_id: str, day: date) -> str | None:
        """Name of the first rule rejecting the candidate, or None when eligible."""
        for r in self.rules:
            if not r.allows(staff_id, day):
                return r.name
        return None

    def cost(self, role: Role, staff_id: str) -> int:
        return sum(r.cost(role, staff_id) for r in self.rules)
