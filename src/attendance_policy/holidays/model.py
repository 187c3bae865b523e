from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import HolidayType, HolidayWorkPolicy


@dataclass(frozen=True)
class PublicHoliday:
    """A dated holiday. Empty applicability lists mean "applies everywhere"."""

    holiday_id: str
    name: str
    date: date
    type: HolidayType = HolidayType.NATIONAL
    work_policy: HolidayWorkPolicy = HolidayWorkPolicy.NO_WORK
    overtime_rate: float = 3.0
    is_substitute_day: bool = False
    original_date: Optional[date] = None
    locations: tuple[str, ...] = field(default_factory=tuple)
    regions: tuple[str, ...] = field(default_factory=tuple)
    applicable_departments: tuple[str, ...] = field(default_factory=tuple)
    applicable_positions: tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True


@dataclass(frozen=True)
class HolidayCheckResult:
    is_holiday: bool
    work_policy: HolidayWorkPolicy
    is_paid_leave: bool
    holiday: Optional[PublicHoliday] = None
    holiday_name: Optional[str] = None
    overtime_rate: Optional[float] = None


@dataclass(frozen=True)
class WorkingDaysResult:
    total_days: int
    working_days: int
    weekend_days: int
    holidays: int
    holiday_dates: tuple[date, ...]
