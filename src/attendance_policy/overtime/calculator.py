from __future__ import annotations

import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import is_weekend
from ..common.money import round_currency
from ..common.validators import require_non_empty_list, require_range
from ..core.constants import MAX_OVERTIME_HOURS_PER_CALCULATION
from ..core.enums import OvertimeType
from ..core.exceptions import RuleNotFoundError
from .model import (
    OvertimeCalculationResult,
    OvertimeLimitExceeded,
    OvertimePolicy,
    OvertimeRecord,
    OvertimeRule,
    OvertimeTotals,
    PeriodOvertimeResult,
)


def _allowed(allow_list: tuple[str, ...], value: Optional[str]) -> bool:
    return not allow_list or value in allow_list


class OvertimeCalculator:
    """Turns overtime hours into payable amounts under an overtime policy."""

    def find_rule(self, policy: OvertimePolicy, overtime_type: OvertimeType) -> OvertimeRule:
        require_non_empty_list(policy.rules, "rules")
        for rule in policy.rules:
            if rule.type == overtime_type:
                return rule
        raise RuleNotFoundError(f"No overtime rule found for type: {OvertimeType(overtime_type).value}")

    def calculate(
        self,
        policy: OvertimePolicy,
        hours: float,
        overtime_type: OvertimeType,
        hourly_rate: float,
    ) -> OvertimeCalculationResult:
        require_range(hours, "overtime_hours", minimum=0, maximum=MAX_OVERTIME_HOURS_PER_CALCULATION)
        require_range(hourly_rate, "hourly_rate", minimum=0)
        rule = self.find_rule(policy, overtime_type)
        conditions = rule.conditions

        effective = float(hours)
        if conditions.rounding_minutes:
            # round() absorbs float noise such as 83.99999999999999 before flooring
            total_minutes = round(hours * 60, 6)
            step = conditions.rounding_minutes
            effective = math.floor(total_minutes / step) * step / 60

        if conditions.min_hours and effective < conditions.min_hours:
            effective = 0.0

        exceeds: Optional[OvertimeLimitExceeded] = None
        if conditions.max_hours_per_day and effective > conditions.max_hours_per_day:
            exceeds = OvertimeLimitExceeded(period="day", limit=conditions.max_hours_per_day, actual=effective, type=rule.type)
            effective = float(conditions.max_hours_per_day)

        requires_approval = (
            policy.requires_approval
            and policy.approval_threshold_hours is not None
            and hours > policy.approval_threshold_hours
        )

        return OvertimeCalculationResult(
            hours=effective,
            rate=rule.rate,
            amount=round_currency(effective * hourly_rate * rule.rate),
            type=rule.type,
            requires_approval=requires_approval,
            is_within_limit=exceeds is None,
            exceeds_limit=exceeds,
        )

    def calculate_period(
        self,
        policy: OvertimePolicy,
        records: Iterable[OvertimeRecord],
        hourly_rate: float,
    ) -> PeriodOvertimeResult:
        """Sum per-record results into per-type and grand totals, in record order."""
        hours_by_type: dict[OvertimeType, float] = {t: 0.0 for t in OvertimeType}
        amount_by_type: dict[OvertimeType, float] = {t: 0.0 for t in OvertimeType}
        weekly: dict[tuple[OvertimeType, str], float] = defaultdict(float)
        results = []
        total_hours = 0.0
        total_amount = 0.0

        for record in records:
            result = self.calculate(policy, record.hours, record.type, hourly_rate)
            results.append(result)
            total_hours += result.hours
            total_amount += result.amount
            hours_by_type[result.type] += result.hours
            amount_by_type[result.type] += result.amount
            weekly[(result.type, _iso_week(record.date))] += result.hours

        exceeded = []
        for (overtime_type, week), week_hours in weekly.items():
            limit = self.find_rule(policy, overtime_type).conditions.max_hours_per_week
            if limit and week_hours > limit:
                exceeded.append(OvertimeLimitExceeded(period="week", limit=limit, actual=week_hours, type=overtime_type, week=week))
        for overtime_type, type_hours in hours_by_type.items():
            if not type_hours:
                continue
            limit = self.find_rule(policy, overtime_type).conditions.max_hours_per_month
            if limit and type_hours > limit:
                exceeded.append(OvertimeLimitExceeded(period="month", limit=limit, actual=type_hours, type=overtime_type))

        return PeriodOvertimeResult(
            total_hours=total_hours,
            total_amount=round_currency(total_amount),
            by_type={
                t: OvertimeTotals(hours=hours_by_type[t], amount=round_currency(amount_by_type[t])) for t in OvertimeType
            },
            results=tuple(results),
            exceeded_limits=tuple(exceeded),
        )

    def is_eligible(
        self,
        policy: OvertimePolicy,
        employee_type: Optional[str],
        position: Optional[str],
        department: Optional[str],
    ) -> bool:
        return (
            _allowed(policy.eligible_employee_types, employee_type)
            and _allowed(policy.eligible_positions, position)
            and _allowed(policy.eligible_departments, department)
        )


def overtime_type_for(day: date, is_holiday: bool = False) -> OvertimeType:
    if is_holiday:
        return OvertimeType.HOLIDAY
    if is_weekend(day):
        return OvertimeType.WEEKEND
    return OvertimeType.WEEKDAY


def _iso_week(day: date) -> str:
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"
