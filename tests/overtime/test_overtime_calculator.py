from datetime import date

import pytest

from attendance_policy.core.enums import OvertimeType
from attendance_policy.core.exceptions import RuleNotFoundError, ValidationError
from attendance_policy.overtime.calculator import OvertimeCalculator, overtime_type_for
from attendance_policy.overtime.model import OvertimeConditions, OvertimePolicy, OvertimeRecord, OvertimeRule


def _policy(*rules: OvertimeRule, **overrides) -> OvertimePolicy:
    values = dict(
        policy_id="ot-1",
        code="OT",
        name="Overtime",
        rules=rules
        or (
            OvertimeRule(type=OvertimeType.WEEKDAY, rate=1.5),
            OvertimeRule(type=OvertimeType.WEEKEND, rate=2.0),
            OvertimeRule(type=OvertimeType.HOLIDAY, rate=3.0),
        ),
    )
    values.update(overrides)
    return OvertimePolicy(**values)


def test_amount_is_hours_times_rate_times_multiplier():
    result = OvertimeCalculator().calculate(_policy(), 2, OvertimeType.WEEKDAY, 100)

    assert result.hours == 2
    assert result.rate == 1.5
    assert result.amount == 300.0
    assert result.is_within_limit
    assert not result.requires_approval


def test_rounding_floors_to_step():
    policy = _policy(OvertimeRule(OvertimeType.WEEKDAY, 1.5, OvertimeConditions(rounding_minutes=30)))

    result = OvertimeCalculator().calculate(policy, 1.4, OvertimeType.WEEKDAY, 100)

    assert result.hours == 1.0
    assert result.amount == 150.0


def test_below_minimum_hours_pays_nothing():
    policy = _policy(OvertimeRule(OvertimeType.WEEKEND, 2.0, OvertimeConditions(min_hours=1)))

    result = OvertimeCalculator().calculate(policy, 0.5, OvertimeType.WEEKEND, 100)

    assert result.hours == 0.0
    assert result.amount == 0.0


def test_daily_cap_clamps_and_reports():
    policy = _policy(OvertimeRule(OvertimeType.WEEKDAY, 1.5, OvertimeConditions(max_hours_per_day=4)))

    result = OvertimeCalculator().calculate(policy, 6, OvertimeType.WEEKDAY, 100)

    assert result.hours == 4.0
    assert result.amount == 600.0
    assert not result.is_within_limit
    assert result.exceeds_limit.limit == 4
    assert result.exceeds_limit.actual == 6


def test_approval_required_above_threshold_of_raw_hours():
    policy = _policy(requires_approval=True, approval_threshold_hours=2)
    calculator = OvertimeCalculator()

    assert calculator.calculate(policy, 2.5, OvertimeType.WEEKDAY, 100).requires_approval
    assert not calculator.calculate(policy, 2, OvertimeType.WEEKDAY, 100).requires_approval


def test_approval_needs_a_threshold():
    policy = _policy(requires_approval=True)

    assert not OvertimeCalculator().calculate(policy, 10, OvertimeType.WEEKDAY, 100).requires_approval


def test_missing_rule_raises():
    policy = _policy(OvertimeRule(OvertimeType.WEEKDAY, 1.5))

    with pytest.raises(RuleNotFoundError):
        OvertimeCalculator().calculate(policy, 1, OvertimeType.HOLIDAY, 100)


@pytest.mark.parametrize("hours,rate", [(-1, 100), (25, 100), (1, -5)])
def test_out_of_range_inputs_raise(hours, rate):
    with pytest.raises(ValidationError):
        OvertimeCalculator().calculate(_policy(), hours, OvertimeType.WEEKDAY, rate)


def test_empty_rule_list_raises():
    policy = OvertimePolicy(policy_id="ot-0", code="NONE", name="None", rules=())

    with pytest.raises(ValidationError):
        OvertimeCalculator().calculate(policy, 1, OvertimeType.WEEKDAY, 100)


def test_period_totals_by_type():
    records = [
        OvertimeRecord(date(2025, 1, 6), 2, OvertimeType.WEEKDAY),
        OvertimeRecord(date(2025, 1, 7), 1, OvertimeType.WEEKDAY),
        OvertimeRecord(date(2025, 1, 11), 3, OvertimeType.WEEKEND),
    ]

    result = OvertimeCalculator().calculate_period(_policy(), records, 100)

    assert result.total_hours == 6
    assert result.total_amount == 1050.0
    assert result.by_type[OvertimeType.WEEKDAY].hours == 3
    assert result.by_type[OvertimeType.WEEKDAY].amount == 450.0
    assert result.by_type[OvertimeType.WEEKEND].amount == 600.0
    assert result.by_type[OvertimeType.HOLIDAY].hours == 0
    assert len(result.results) == 3
    assert result.exceeded_limits == ()


def test_period_reports_weekly_and_monthly_limits():
    policy = _policy(
        OvertimeRule(OvertimeType.WEEKDAY, 1.5, OvertimeConditions(max_hours_per_week=5, max_hours_per_month=8)),
    )
    records = [OvertimeRecord(date(2025, 1, d), 3, OvertimeType.WEEKDAY) for d in (6, 7, 13)]

    result = OvertimeCalculator().calculate_period(policy, records, 100)

    periods = {(e.period, e.week) for e in result.exceeded_limits}
    assert ("week", "2025-W02") in periods
    assert ("month", None) in periods
    assert result.total_hours == 9


def test_eligibility_allow_lists():
    policy = _policy(eligible_departments=("ops",), eligible_employee_types=())
    calculator = OvertimeCalculator()

    assert calculator.is_eligible(policy, "full-time", "engineer", "ops")
    assert not calculator.is_eligible(policy, "full-time", "engineer", "sales")


def test_overtime_type_for_day():
    assert overtime_type_for(date(2025, 1, 6)) == OvertimeType.WEEKDAY
    assert overtime_type_for(date(2025, 1, 5)) == OvertimeType.WEEKEND
    assert overtime_type_for(date(2025, 1, 4), is_holiday=True) == OvertimeType.HOLIDAY
