from __future__ import annotations

from typing import Optional

from ..model import PenaltyPolicy, ProgressivePenaltyRule, Violation
from .base import PenaltyStrategy


def select_tier(rules: tuple[ProgressivePenaltyRule, ...], occurrence: int) -> Optional[ProgressivePenaltyRule]:
    """First tier, in ascending ``from_occurrence`` order, whose range holds the occurrence."""
    for rule in sorted(rules, key=lambda r: r.from_occurrence):
        if rule.covers(occurrence):
            return rule
    return None


class ProgressivePenaltyStrategy(PenaltyStrategy):
    """Amount depends on how many times the violation occurred this period."""

    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        tier = select_tier(policy.progressive_rules, occurrence)
        if tier is None:
            return 0.0
        if tier.amount:
            return float(tier.amount)
        if tier.percentage and violation.employee_salary:
            return violation.employee_salary * tier.percentage / 100
        return 0.0
