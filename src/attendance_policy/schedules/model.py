from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class FlexibleTimeRange:
    earliest: str
    latest: str


@dataclass(frozen=True)
class WorkSchedulePolicy:
    """Standard working hours and the tolerances applied to clock events.

    ``standard_start_time`` and ``standard_end_time`` are ``HH:mm``. They are not
    required to satisfy start < end; validation always compares against the
    same-day clock reading.
    """

    policy_id: str
    code: str
    name: str
    working_days: frozenset[int]
    standard_start_time: str
    standard_end_time: str
    break_duration: int = 60
    late_threshold_minutes: int = 0
    early_leave_threshold_minutes: int = 0
    grace_period_minutes: int = 0
    allow_flexible_time: bool = False
    flexible_start_time_range: Optional[FlexibleTimeRange] = None
    flexible_end_time_range: Optional[FlexibleTimeRange] = None
    overtime_starts_after: int = 0
    max_overtime_hours_per_day: float = 4
    hours_per_day: float = 8
    applicable_departments: tuple[str, ...] = field(default_factory=tuple)
    applicable_positions: tuple[str, ...] = field(default_factory=tuple)
    applicable_employment_types: tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None


@dataclass(frozen=True)
class TimeValidationResult:
    is_valid: bool
    status: AttendanceStatus
    message: str
    is_late: bool = False
    minutes_late: int = 0
    is_early_leave: bool = False
    minutes_early: int = 0
    is_within_flexible_range: bool = False
    overtime_minutes: int = 0
