from __future__ import annotations

from ..model import PenaltyPolicy, Violation
from .base import PenaltyStrategy


class HourlyRatePenaltyStrategy(PenaltyStrategy):
    """(minutes / 60) * hourly rate * multiplier."""

    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        if not policy.hourly_rate_multiplier or not violation.hourly_rate or not violation.minutes_late:
            return 0.0
        return (violation.minutes_late / 60) * violation.hourly_rate * policy.hourly_rate_multiplier


class DailyRatePenaltyStrategy(PenaltyStrategy):
    """daily rate * multiplier."""

    def raw_amount(self, policy: PenaltyPolicy, violation: Violation, occurrence: int) -> float:
        if not policy.daily_rate_multiplier or not violation.daily_rate:
            return 0.0
        return violation.daily_rate * policy.daily_rate_multiplier
