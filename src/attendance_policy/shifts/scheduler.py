from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import TimeLike, iter_days, normalize_date, time_to_minutes, weekday_index
from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import NotFoundError, ValidationError
from .model import CurrentShiftInfo, RotationPattern, ScheduleDay, Shift, ShiftAssignment, ShiftBreak
from .repository import ShiftRepository


def calculate_gross_hours(start_time: TimeLike, end_time: TimeLike) -> float:
    """Shift length including breaks. ``end <= start`` is an overnight shift."""
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    if end <= start:
        end += MINUTES_PER_DAY
    return (end - start) / 60


def calculate_work_hours(start_time: TimeLike, end_time: TimeLike, breaks: Iterable[ShiftBreak]) -> float:
    gross_minutes = calculate_gross_hours(start_time, end_time) * 60
    return (gross_minutes - sum(b.duration for b in breaks)) / 60


def resolve_rotation_code(pattern: RotationPattern, day: date) -> str:
    """Shift code the rotation puts on ``day``.

    index = floor(cycle_position / cycle_days * len(sequence)). When cycle_days
    is not a multiple of the sequence length, shifts get uneven day counts.
    """
    if not pattern.sequence:
        raise ValidationError("rotation sequence must not be empty")
    if pattern.cycle_days <= 0:
        raise ValidationError("rotation cycle_days must be positive")
    days_since_start = (normalize_date(day) - pattern.start_date).days
    cycle_position = days_since_start % pattern.cycle_days
    index = cycle_position * len(pattern.sequence) // pattern.cycle_days
    return pattern.sequence[index]


def is_active_on_date(shift: Shift, day: date) -> bool:
    """The shift's own window: active flag, effective/expiry dates, applicable days."""
    day = normalize_date(day)
    if not shift.is_active:
        return False
    if shift.effective_date and day < shift.effective_date:
        return False
    if shift.expiry_date and day > shift.expiry_date:
        return False
    return weekday_index(day) in shift.applicable_days


def find_assignment_overlaps(assignments: Iterable[ShiftAssignment]) -> list[tuple[ShiftAssignment, ShiftAssignment]]:
    """Pairs of active assignments of the same employee whose date ranges intersect."""
    by_employee: dict[str, list[ShiftAssignment]] = {}
    for a in assignments:
        if a.is_active:
            by_employee.setdefault(a.employee_id, []).append(a)

    overlaps = []
    for items in by_employee.values():
        items.sort(key=lambda a: a.start_date)
        for i, first in enumerate(items):
            for second in items[i + 1:]:
                if first.end_date is not None and second.start_date > first.end_date:
                    break
                overlaps.append((first, second))
    return overlaps


def ensure_no_overlaps(assignments: Iterable[ShiftAssignment]) -> None:
    overlaps = find_assignment_overlaps(assignments)
    if overlaps:
        first, second = overlaps[0]
        raise ValidationError(
            f"Shift assignments {first.assignment_id} and {second.assignment_id} "
            f"overlap for employee {first.employee_id}"
        )


class ShiftScheduler:
    """Resolves which shift applies to an employee on a date."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def _active_assignment(self, employee_id: str, day: date) -> Optional[ShiftAssignment]:
        weekday = weekday_index(day)
        for assignment in self._shifts.list_assignments_for_employee(employee_id):
            if assignment.is_active and assignment.covers(day) and weekday in assignment.work_days:
                return assignment
        return None

    def _shift_by_id(self, shift_id: str) -> Shift:
        shift = self._shifts.get_shift(shift_id)
        if not shift:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def _shift_by_code(self, code: str) -> Shift:
        shift = self._shifts.get_shift_by_code(code)
        if not shift:
            raise NotFoundError(f"Shift with code {code} not found")
        return shift

    def get_current_shift(self, employee_id: str, day: date) -> Optional[CurrentShiftInfo]:
        day = normalize_date(day)
        assignment = self._active_assignment(employee_id, day)
        if not assignment:
            return None

        rotation_code = None
        if assignment.is_rotational and assignment.rotation_pattern:
            rotation_code = resolve_rotation_code(assignment.rotation_pattern, day)
            shift = self._shift_by_code(rotation_code)
        else:
            shift = self._shift_by_id(assignment.shift_id)

        return CurrentShiftInfo(
            shift=shift,
            assignment=assignment,
            effective_start_time=shift.start_time,
            effective_end_time=shift.end_time,
            rotation_code=rotation_code,
            is_live=is_active_on_date(shift, day),
        )

    def is_on_shift(self, employee_id: str, day: date) -> bool:
        return self.get_current_shift(employee_id, day) is not None

    def get_schedule(self, employee_id: str, start: date, end: date) -> Sequence[ScheduleDay]:
        start, end = normalize_date(start), normalize_date(end)
        if end < start:
            raise ValidationError("end date must not be before start date")
        schedule = []
        for day in iter_days(start, end):
            info = self.get_current_shift(employee_id, day)
            schedule.append(ScheduleDay(date=day, shift=info.shift if info else None))
        return schedule
