from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import ALL_DAYS
from ..core.enums import RotationType


@dataclass(frozen=True)
class ShiftBreak:
    name: str
    start_time: str
    duration: int  # minutes


@dataclass(frozen=True)
class Shift:
    """A work shift (e.g. Morning, Night). ``end_time <= start_time`` means overnight."""

    shift_id: str
    code: str
    name: str
    start_time: str
    end_time: str
    breaks: tuple[ShiftBreak, ...] = field(default_factory=tuple)
    gross_hours: float = 0.0
    work_hours: float = 0.0
    premium_rate: float = 0.0
    night_shift_bonus: float = 0.0
    applicable_days: frozenset[int] = frozenset(ALL_DAYS)
    is_active: bool = True
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None

    @property
    def break_minutes(self) -> int:
        return sum(b.duration for b in self.breaks)


@dataclass(frozen=True)
class RotationPattern:
    """Shift codes applied cyclically from ``start_date``, one cycle every ``cycle_days``."""

    sequence: tuple[str, ...]
    cycle_days: int
    start_date: date
    type: RotationType = RotationType.CUSTOM


@dataclass(frozen=True)
class ShiftAssignment:
    assignment_id: str
    employee_id: str
    shift_id: str
    start_date: date
    end_date: Optional[date] = None
    work_days: frozenset[int] = frozenset({1, 2, 3, 4, 5})
    shift_code: Optional[str] = None
    rotation_pattern: Optional[RotationPattern] = None
    is_permanent: bool = True
    is_rotational: bool = False
    is_active: bool = True
    notes: Optional[str] = None

    def covers(self, day: date) -> bool:
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date


@dataclass(frozen=True)
class CurrentShiftInfo:
    shift: Shift
    assignment: ShiftAssignment
    effective_start_time: str
    effective_end_time: str
    rotation_code: Optional[str] = None
    is_live: bool = True


@dataclass(frozen=True)
class ScheduleDay:
    date: date
    shift: Optional[Shift]
