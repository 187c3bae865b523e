from __future__ import annotations

from dataclasses import dataclass

from .geofence.validator import GeofenceValidator
from .holidays.calendar import HolidayCalendar
from .overtime.calculator import OvertimeCalculator
from .penalties.calculator import PenaltyCalculator
from .penalties.factory import PenaltyStrategyFactory
from .schedules.evaluator import WorkScheduleEvaluator
from .schedules.factory import ClockDecisionFactory
from .shifts.scheduler import ShiftScheduler
from .snapshot.repository import PolicyRepository


@dataclass(frozen=True)
class Container:
    repository: PolicyRepository

    work_schedule_evaluator: WorkScheduleEvaluator
    overtime_calculator: OvertimeCalculator
    penalty_calculator: PenaltyCalculator
    holiday_calendar: HolidayCalendar
    shift_scheduler: ShiftScheduler
    geofence_validator: GeofenceValidator


def build_container(*, repository: PolicyRepository) -> Container:
    work_schedule_evaluator = WorkScheduleEvaluator(decision_factory=ClockDecisionFactory())
    overtime_calculator = OvertimeCalculator()
    penalty_calculator = PenaltyCalculator(strategy_factory=PenaltyStrategyFactory())
    holiday_calendar = HolidayCalendar(repository.list_holidays())
    shift_scheduler = ShiftScheduler(repository)
    geofence_validator = GeofenceValidator(repository.list_geofences())

    return Container(
        repository=repository,
        work_schedule_evaluator=work_schedule_evaluator,
        overtime_calculator=overtime_calculator,
        penalty_calculator=penalty_calculator,
        holiday_calendar=holiday_calendar,
        shift_scheduler=shift_scheduler,
        geofence_validator=geofence_validator,
    )
