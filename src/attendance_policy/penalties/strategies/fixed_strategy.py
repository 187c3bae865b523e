from __future__ import annotations

from ..model import PenaltyPolicy, Violation
from .base import PenaltyStrategy


class FixedPenaltyStrategy(PenaltyStrategy):
    """Flat amount per violation."""

    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        return float(policy.amount or 0)


class PercentagePenaltyStrategy(PenaltyStrategy):
    """salary * percentage / 100."""

    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        if not policy.percentage or not violation.employee_salary:
            return 0.0
        return violation.employee_salary * policy.percentage / 100
