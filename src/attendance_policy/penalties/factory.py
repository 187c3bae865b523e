from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PenaltyCalculationType
from ..core.exceptions import ValidationError
from .model import PenaltyPolicy
from .strategies.base import PenaltyStrategy
from .strategies.fixed_strategy import FixedPenaltyStrategy, PercentagePenaltyStrategy
from .strategies.progressive_strategy import ProgressivePenaltyStrategy
from .strategies.rate_strategy import DailyRatePenaltyStrategy, HourlyRatePenaltyStrategy

_BY_TYPE = {
    PenaltyCalculationType.FIXED: FixedPenaltyStrategy,
    PenaltyCalculationType.PERCENTAGE: PercentagePenaltyStrategy,
    PenaltyCalculationType.HOURLY_RATE: HourlyRatePenaltyStrategy,
    PenaltyCalculationType.DAILY_RATE: DailyRatePenaltyStrategy,
    PenaltyCalculationType.PROGRESSIVE: ProgressivePenaltyStrategy,
}


@dataclass
class PenaltyStrategyFactory:
    """Factory Pattern: choose the amount strategy for a policy."""

    def for_policy(self, policy: PenaltyPolicy) -> PenaltyStrategy:
        if policy.is_progressive and policy.progressive_rules:
            return ProgressivePenaltyStrategy()
        try:
            return _BY_TYPE[PenaltyCalculationType(policy.calculation_type)]()
        except (KeyError, ValueError) as exc:
            raise ValidationError(f"Unknown penalty calculation type: {policy.calculation_type!r}") from exc
