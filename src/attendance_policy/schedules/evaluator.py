from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import TimeLike, time_to_minutes, weekday_index
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .factory import ClockDecisionFactory
from .model import TimeValidationResult, WorkSchedulePolicy


def _non_working_day() -> TimeValidationResult:
    return TimeValidationResult(is_valid=False, status=AttendanceStatus.NON_WORKING_DAY, message="Not a working day")


class WorkScheduleEvaluator:
    """Validates clock readings against a work schedule policy."""

    def __init__(self, *, decision_factory: Optional[ClockDecisionFactory] = None):
        self._factory = decision_factory or ClockDecisionFactory()

    def is_working_day(self, policy: WorkSchedulePolicy, day: date) -> bool:
        return weekday_index(day) in policy.working_days

    def validate_clock_in(self, policy: WorkSchedulePolicy, time_of_day: TimeLike, day: date) -> TimeValidationResult:
        if not self.is_working_day(policy, day):
            return _non_working_day()

        clock_in = time_to_minutes(time_of_day)
        diff = clock_in - time_to_minutes(policy.standard_start_time)
        strategy = self._factory.for_clock_in(policy=policy, diff_minutes=diff, clock_minutes=clock_in)
        return strategy.decide(minutes=diff)

    def validate_clock_out(self, policy: WorkSchedulePolicy, time_of_day: TimeLike, day: date) -> TimeValidationResult:
        if not self.is_working_day(policy, day):
            return _non_working_day()

        clock_out = time_to_minutes(time_of_day)
        diff = time_to_minutes(policy.standard_end_time) - clock_out
        strategy = self._factory.for_clock_out(policy=policy, diff_minutes=diff, clock_minutes=clock_out)
        return strategy.decide(minutes=diff)

    def calculate_working_hours(self, policy: WorkSchedulePolicy, start_time: TimeLike, end_time: TimeLike) -> float:
        """Same-day working hours minus the policy break; 0 when end <= start."""
        start = time_to_minutes(start_time)
        end = time_to_minutes(end_time)
        if end <= start:
            return 0.0
        return (end - start - policy.break_duration) / 60


def calculate_work_duration(clock_in: datetime, clock_out: datetime, break_minutes: int = 0) -> float:
    """Hours between two timestamps minus breaks, rounded to 2 places."""
    if clock_out < clock_in:
        raise ValidationError("clock_out must not be before clock_in")
    minutes = (clock_out - clock_in).total_seconds() / 60 - break_minutes
    return round(minutes / 60, 2)


def calculate_overtime_hours(actual_work_hours: float, standard_hours_per_day: float, overtime_starts_after_minutes: int = 0) -> float:
    threshold = standard_hours_per_day + overtime_starts_after_minutes / 60
    return round(max(0.0, actual_work_hours - threshold), 2)
