from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import OvertimeType


@dataclass(frozen=True)
class OvertimeConditions:
    min_hours: Optional[float] = None
    max_hours_per_day: Optional[float] = None
    max_hours_per_week: Optional[float] = None
    max_hours_per_month: Optional[float] = None
    rounding_minutes: Optional[int] = None


@dataclass(frozen=True)
class OvertimeRule:
    type: OvertimeType
    rate: float
    conditions: OvertimeConditions = field(default_factory=OvertimeConditions)


@dataclass(frozen=True)
class OvertimePolicy:
    policy_id: str
    code: str
    name: str
    rules: tuple[OvertimeRule, ...]
    requires_approval: bool = False
    approval_threshold_hours: Optional[float] = None
    auto_approve_under: Optional[float] = None
    holiday_rate: float = 3.0
    weekend_rate: float = 2.0
    night_shift_rate: Optional[float] = None
    eligible_employee_types: tuple[str, ...] = field(default_factory=tuple)
    eligible_positions: tuple[str, ...] = field(default_factory=tuple)
    eligible_departments: tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None


@dataclass(frozen=True)
class OvertimeLimitExceeded:
    period: str  # "day" | "week" | "month"
    limit: float
    actual: float
    type: Optional[OvertimeType] = None
    week: Optional[str] = None


@dataclass(frozen=True)
class OvertimeCalculationResult:
    hours: float
    rate: float
    amount: float
    type: OvertimeType
    requires_approval: bool
    is_within_limit: bool
    exceeds_limit: Optional[OvertimeLimitExceeded] = None


@dataclass(frozen=True)
class OvertimeRecord:
    """One day's overtime fact fed to the period aggregation."""

    date: date
    hours: float
    type: OvertimeType


@dataclass(frozen=True)
class OvertimeTotals:
    hours: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True)
class PeriodOvertimeResult:
    total_hours: float
    total_amount: float
    by_type: dict[OvertimeType, OvertimeTotals]
    results: tuple[OvertimeCalculationResult, ...] = ()
    exceeded_limits: tuple[OvertimeLimitExceeded, ...] = ()
