from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import TimeValidationResult
from .base import ClockDecisionStrategy


class NormalStrategy(ClockDecisionStrategy):
    """On time: inside the grace period or below the violation threshold."""

    def decide(self, *, minutes: int) -> TimeValidationResult:
        return TimeValidationResult(is_valid=True, status=AttendanceStatus.ON_TIME, message="On time")


class FlexibleStrategy(ClockDecisionStrategy):
    """Accepted because the clock reading falls inside the flexible window."""

    def __init__(self, event: str):
        self._event = event

    def decide(self, *, minutes: int) -> TimeValidationResult:
        return TimeValidationResult(
            is_valid=True,
            status=AttendanceStatus.FLEXIBLE,
            message=f"{self._event} within flexible time range",
            is_within_flexible_range=True,
        )


class EarlyArrivalStrategy(ClockDecisionStrategy):
    """Clock-in before the scheduled start. Always accepted."""

    def decide(self, *, minutes: int) -> TimeValidationResult:
        return TimeValidationResult(
            is_valid=True,
            status=AttendanceStatus.EARLY_ARRIVAL,
            message=f"Arrived {abs(minutes)} minutes early",
        )
