from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import PenaltyCalculationType, PenaltyType


@dataclass(frozen=True)
class PenaltyThreshold:
    minutes: Optional[int] = None
    occurrences: Optional[int] = None
    days: Optional[int] = None


@dataclass(frozen=True)
class ProgressivePenaltyRule:
    """Tier covering occurrences ``from_occurrence`` .. ``to_occurrence`` (inclusive).

    ``to_occurrence=None`` means this tier and everything beyond.
    """

    from_occurrence: int
    to_occurrence: Optional[int] = None
    amount: float = 0
    percentage: Optional[float] = None
    description: Optional[str] = None

    def covers(self, occurrence: int) -> bool:
        if self.to_occurrence is not None:
            return self.from_occurrence <= occurrence <= self.to_occurrence
        return occurrence >= self.from_occurrence


@dataclass(frozen=True)
class PenaltyPolicy:
    policy_id: str
    code: str
    name: str
    type: PenaltyType
    calculation_type: PenaltyCalculationType
    amount: Optional[float] = None
    percentage: Optional[float] = None
    hourly_rate_multiplier: Optional[float] = None
    daily_rate_multiplier: Optional[float] = None
    threshold: PenaltyThreshold = field(default_factory=PenaltyThreshold)
    grace_period_minutes: Optional[int] = None
    grace_occurrences: Optional[int] = None
    is_progressive: bool = False
    progressive_rules: tuple[ProgressivePenaltyRule, ...] = field(default_factory=tuple)
    applicable_departments: tuple[str, ...] = field(default_factory=tuple)
    applicable_positions: tuple[str, ...] = field(default_factory=tuple)
    applicable_employment_types: tuple[str, ...] = field(default_factory=tuple)
    auto_apply: bool = True
    requires_approval: bool = False
    max_penalty_per_month: Optional[float] = None
    max_occurrences_per_month: Optional[int] = None
    is_active: bool = True
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None


@dataclass(frozen=True)
class Violation:
    """A violation to price. ``minutes_late`` also carries early-leave minutes."""

    type: PenaltyType
    minutes_late: Optional[int] = None
    occurrence_count: Optional[int] = None
    employee_salary: Optional[float] = None
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None
    employee_id: Optional[str] = None
    date: Optional[date] = None


@dataclass(frozen=True)
class PenaltyDetails:
    policy_code: str
    policy_name: str
    calculation_type: PenaltyCalculationType
    threshold: PenaltyThreshold
    minutes: Optional[int]
    occurrences: Optional[int]
    is_within_grace_period: bool
    is_within_cap: bool
    requires_approval: bool


@dataclass(frozen=True)
class PenaltyCalculationResult:
    should_apply: bool
    amount: float
    reason: str
    details: PenaltyDetails


@dataclass(frozen=True)
class AttendanceFacts:
    """What one attendance day contributes to automatic penalties."""

    date: date
    minutes_late: int = 0
    minutes_early: int = 0
    is_excused_late: bool = False
    is_approved_early_leave: bool = False
    is_missed_clock_out: bool = False
    occurrence_count: Optional[int] = None
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None


@dataclass(frozen=True)
class AttendancePenalty:
    policy_id: str
    type: PenaltyType
    amount: float
    description: str
