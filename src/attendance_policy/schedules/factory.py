from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import time_to_minutes
from .model import FlexibleTimeRange, WorkSchedulePolicy
from .strategies.base import ClockDecisionStrategy
from .strategies.early_strategy import EarlyLeaveStrategy, OvertimeStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import EarlyArrivalStrategy, FlexibleStrategy, NormalStrategy


def _within(window: Optional[FlexibleTimeRange], clock_minutes: int) -> bool:
    if window is None:
        return False
    return time_to_minutes(window.earliest) <= clock_minutes <= time_to_minutes(window.latest)


@dataclass
class ClockDecisionFactory:
    """Factory Pattern: choose the decision strategy for a clock event.

    Order: grace period, flexible window, violation threshold, then the
    non-violating side (early arrival / staying late).
    """

    def for_clock_in(self, *, policy: WorkSchedulePolicy, diff_minutes: int, clock_minutes: int) -> ClockDecisionStrategy:
        if abs(diff_minutes) <= policy.grace_period_minutes:
            return NormalStrategy()
        if policy.allow_flexible_time and _within(policy.flexible_start_time_range, clock_minutes):
            return FlexibleStrategy("Clock-in")
        if diff_minutes > policy.late_threshold_minutes:
            return LateStrategy()
        if diff_minutes < 0:
            return EarlyArrivalStrategy()
        return NormalStrategy()

    def for_clock_out(self, *, policy: WorkSchedulePolicy, diff_minutes: int, clock_minutes: int) -> ClockDecisionStrategy:
        if abs(diff_minutes) <= policy.grace_period_minutes:
            return NormalStrategy()
        if policy.allow_flexible_time and _within(policy.flexible_end_time_range, clock_minutes):
            return FlexibleStrategy("Clock-out")
        if diff_minutes > policy.early_leave_threshold_minutes:
            return EarlyLeaveStrategy()
        if diff_minutes < 0:
            return OvertimeStrategy()
        return NormalStrategy()
