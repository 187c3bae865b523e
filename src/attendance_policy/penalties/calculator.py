from __future__ import annotations

from typing import Iterable, Optional

from ..common.employee import EmployeeContext
from ..common.money import round_currency
from ..common.validators import require_optional_range
from ..core.enums import PenaltyType
from ..core.exceptions import RuleNotFoundError
from .factory import PenaltyStrategyFactory
from .model import (
    AttendanceFacts,
    AttendancePenalty,
    PenaltyCalculationResult,
    PenaltyDetails,
    PenaltyPolicy,
    Violation,
)

_MINUTE_BASED = (PenaltyType.LATE, PenaltyType.EARLY_LEAVE)


def _allowed(allow_list: tuple[str, ...], value: Optional[str]) -> bool:
    return not allow_list or value in allow_list


class PenaltyCalculator:
    """Prices a violation under a penalty policy.

    Steps: type check, input ranges, grace period, minute threshold, amount
    by strategy, monthly amount cap, rounding. The occurrence grace
    (``grace_occurrences``) and occurrence cap (``max_occurrences_per_month``)
    checks run before the amount step; they extend the base pipeline, which
    only carries those fields on the policy.
    """

    def __init__(self, *, strategy_factory: Optional[PenaltyStrategyFactory] = None):
        self._factory = strategy_factory or PenaltyStrategyFactory()

    def calculate(self, policy: PenaltyPolicy, violation: Violation) -> PenaltyCalculationResult:
        if policy.type != violation.type:
            raise RuleNotFoundError(
                f"Penalty policy {policy.code} handles {PenaltyType(policy.type).value}, "
                f"not {PenaltyType(violation.type).value}"
            )

        require_optional_range(violation.minutes_late, "minutes_late", minimum=0)
        require_optional_range(violation.occurrence_count, "occurrence_count", minimum=1)
        require_optional_range(violation.employee_salary, "employee_salary", minimum=0)
        require_optional_range(violation.hourly_rate, "hourly_rate", minimum=0)
        require_optional_range(violation.daily_rate, "daily_rate", minimum=0)

        minutes = violation.minutes_late
        occurrence = violation.occurrence_count or 1

        def skipped(reason: str, *, grace: bool = False, within_cap: bool = True) -> PenaltyCalculationResult:
            return PenaltyCalculationResult(
                should_apply=False,
                amount=0.0,
                reason=reason,
                details=self._details(policy, minutes, violation.occurrence_count, grace=grace, within_cap=within_cap),
            )

        if (
            policy.type in _MINUTE_BASED
            and policy.grace_period_minutes is not None
            and minutes is not None
            and minutes <= policy.grace_period_minutes
        ):
            return skipped("Within grace period", grace=True)

        if policy.threshold.minutes and minutes is not None and minutes < policy.threshold.minutes:
            return skipped(f"Below threshold ({policy.threshold.minutes} minutes)")

        if policy.grace_occurrences and occurrence <= policy.grace_occurrences:
            return skipped(f"Within grace occurrences ({policy.grace_occurrences})", grace=True)

        if policy.max_occurrences_per_month and occurrence > policy.max_occurrences_per_month:
            return skipped(f"Monthly occurrence cap reached ({policy.max_occurrences_per_month})", within_cap=False)

        amount = self._factory.for_policy(policy).raw_amount(policy, violation, occurrence)

        within_cap = True
        if policy.max_penalty_per_month and amount > policy.max_penalty_per_month:
            within_cap = False
            amount = policy.max_penalty_per_month

        amount = round_currency(amount)
        return PenaltyCalculationResult(
            should_apply=amount > 0,
            amount=amount,
            reason=f"Penalty applied: {policy.name}" if amount > 0 else "No penalty amount",
            details=self._details(policy, minutes, occurrence, grace=False, within_cap=within_cap),
        )

    def is_applicable(
        self,
        policy: PenaltyPolicy,
        employee_type: Optional[str],
        position: Optional[str],
        department: Optional[str],
    ) -> bool:
        return (
            _allowed(policy.applicable_employment_types, employee_type)
            and _allowed(policy.applicable_positions, position)
            and _allowed(policy.applicable_departments, department)
        )

    def assess_attendance(
        self,
        policies: Iterable[PenaltyPolicy],
        facts: AttendanceFacts,
        employee: EmployeeContext,
    ) -> list[AttendancePenalty]:
        """Automatic penalties for one attendance day.

        Only active, auto-apply policies applicable to the employee are used.
        """
        candidates = [
            p
            for p in policies
            if p.is_active
            and p.auto_apply
            and self.is_applicable(p, employee.employment_type, employee.position, employee.department)
        ]

        violations: list[tuple[Violation, str]] = []
        if facts.minutes_late > 0 and not facts.is_excused_late:
            violations.append(
                (self._violation(PenaltyType.LATE, facts, employee, facts.minutes_late), f"Late {facts.minutes_late} minutes")
            )
        if facts.minutes_early > 0 and not facts.is_approved_early_leave:
            violations.append(
                (
                    self._violation(PenaltyType.EARLY_LEAVE, facts, employee, facts.minutes_early),
                    f"Left {facts.minutes_early} minutes early",
                )
            )
        if facts.is_missed_clock_out:
            violations.append((self._violation(PenaltyType.NO_CLOCK_OUT, facts, employee, None), "Missed clock-out"))

        penalties: list[AttendancePenalty] = []
        for violation, label in violations:
            for policy in candidates:
                if policy.type != violation.type:
                    continue
                result = self.calculate(policy, violation)
                if result.amount > 0:
                    penalties.append(
                        AttendancePenalty(
                            policy_id=policy.policy_id,
                            type=violation.type,
                            amount=result.amount,
                            description=f"{label} - {policy.name}",
                        )
                    )
        return penalties

    @staticmethod
    def _violation(kind: PenaltyType, facts: AttendanceFacts, employee: EmployeeContext, minutes: Optional[int]) -> Violation:
        return Violation(
            type=kind,
            minutes_late=minutes,
            occurrence_count=facts.occurrence_count,
            employee_salary=employee.base_salary,
            hourly_rate=facts.hourly_rate,
            daily_rate=facts.daily_rate,
            employee_id=employee.employee_id,
            date=facts.date,
        )

    @staticmethod
    def _details(
        policy: PenaltyPolicy,
        minutes: Optional[int],
        occurrences: Optional[int],
        *,
        grace: bool,
        within_cap: bool,
    ) -> PenaltyDetails:
        return PenaltyDetails(
            policy_code=policy.code,
            policy_name=policy.name,
            calculation_type=policy.calculation_type,
            threshold=policy.threshold,
            minutes=minutes,
            occurrences=occurrences,
            is_within_grace_period=grace,
            is_within_cap=within_cap,
            requires_approval=policy.requires_approval,
        )


def total_penalty(penalties: Iterable[AttendancePenalty]) -> float:
    return round_currency(sum(p.amount for p in penalties))
