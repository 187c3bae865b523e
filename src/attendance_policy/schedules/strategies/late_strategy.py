from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import TimeValidationResult
from .base import ClockDecisionStrategy


class LateStrategy(ClockDecisionStrategy):
    """Late clock-in."""

    def decide(self, *, minutes: int) -> TimeValidationResult:
        return TimeValidationResult(
            is_valid=True,
            status=AttendanceStatus.LATE,
            message=f"Late by {minutes} minutes",
            is_late=True,
            minutes_late=minutes,
        )
