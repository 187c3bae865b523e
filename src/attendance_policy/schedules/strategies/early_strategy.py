from __future__ import annotations

from ...common.datetime_utils import format_minutes
from ...core.enums import AttendanceStatus
from ..model import TimeValidationResult
from .base import ClockDecisionStrategy


class EarlyLeaveStrategy(ClockDecisionStrategy):
    """Clock-out before the scheduled end, beyond the early-leave threshold."""

    def decide(self, *, minutes: int) -> TimeValidationResult:
        return TimeValidationResult(
            is_valid=True,
            status=AttendanceStatus.EARLY_LEAVE,
            message=f"Early leave by {minutes} minutes",
            is_early_leave=True,
            minutes_early=minutes,
        )


class OvertimeStrategy(ClockDecisionStrategy):
    """Clock-out after the scheduled end: informal overtime, not a violation."""

    def decide(self, *, minutes: int) -> TimeValidationResult:
        overtime = abs(minutes)
        return TimeValidationResult(
            is_valid=True,
            status=AttendanceStatus.OVERTIME,
            message=f"Worked {format_minutes(overtime)} past schedule",
            overtime_minutes=overtime,
        )
