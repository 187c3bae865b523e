"""Schema validation at the repository boundary.

Raw snapshot documents (mappings with snake_case keys) become typed, frozen
records. Anything malformed raises ``ValidationError``; nothing is coerced
silently, so the evaluators can assume well-formed input.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..common.datetime_utils import minutes_to_time, parse_iso_date
from ..common.validators import (
    require_non_empty,
    require_non_empty_list,
    require_optional_range,
    require_range,
    require_time_string,
    require_weekdays,
)
from ..core.constants import ALL_DAYS, MINUTES_PER_DAY
from ..core.enums import (
    HolidayType,
    HolidayWorkPolicy,
    OvertimeType,
    PenaltyCalculationType,
    PenaltyType,
    RotationType,
)
from ..core.exceptions import ValidationError
from ..geofence.model import GeofenceConfig
from ..holidays.model import PublicHoliday
from ..overtime.model import OvertimeConditions, OvertimePolicy, OvertimeRule
from ..penalties.model import PenaltyPolicy, PenaltyThreshold, ProgressivePenaltyRule
from ..schedules.model import FlexibleTimeRange, WorkSchedulePolicy
from ..shifts.model import RotationPattern, Shift, ShiftAssignment, ShiftBreak
from ..shifts.scheduler import calculate_gross_hours, calculate_work_hours

E = TypeVar("E", bound=Enum)

Document = Mapping[str, Any]


def _date(doc: Document, key: str, *, required: bool = False) -> Optional[date]:
    value = doc.get(key)
    if value is None:
        if required:
            raise ValidationError(f"{key} is required")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value))


def _enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from exc


def _strings(doc: Document, key: str) -> tuple[str, ...]:
    values = doc.get(key) or []
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{key} must be a list")
    return tuple(str(v) for v in values)


def _time(value: Any, field_name: str) -> str:
    # PyYAML resolves an unquoted 17:30 as the base-60 integer 1050.
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < MINUTES_PER_DAY:
            raise ValidationError(f"{field_name}: invalid time of day {value!r}")
        value = minutes_to_time(value)
    return require_time_string(value, field_name)


def _id(doc: Document, key: str) -> str:
    return require_non_empty(str(doc.get(key) or ""), key)


def _flex(doc: Document, key: str) -> Optional[FlexibleTimeRange]:
    value = doc.get(key)
    if not value:
        return None
    return FlexibleTimeRange(
        earliest=_time(value.get("earliest"), f"{key}.earliest"),
        latest=_time(value.get("latest"), f"{key}.latest"),
    )


def parse_work_schedule_policy(doc: Document) -> WorkSchedulePolicy:
    return WorkSchedulePolicy(
        policy_id=_id(doc, "id"),
        code=_id(doc, "code"),
        name=str(doc.get("name") or doc["code"]),
        working_days=require_weekdays(doc.get("working_days", [1, 2, 3, 4, 5]), "working_days"),
        standard_start_time=_time(doc.get("standard_start_time"), "standard_start_time"),
        standard_end_time=_time(doc.get("standard_end_time"), "standard_end_time"),
        break_duration=int(require_range(doc.get("break_duration", 60), "break_duration", minimum=0, maximum=480)),
        late_threshold_minutes=int(require_range(doc.get("late_threshold_minutes", 0), "late_threshold_minutes", minimum=0)),
        early_leave_threshold_minutes=int(
            require_range(doc.get("early_leave_threshold_minutes", 0), "early_leave_threshold_minutes", minimum=0)
        ),
        grace_period_minutes=int(require_range(doc.get("grace_period_minutes", 0), "grace_period_minutes", minimum=0)),
        allow_flexible_time=bool(doc.get("allow_flexible_time", False)),
        flexible_start_time_range=_flex(doc, "flexible_start_time_range"),
        flexible_end_time_range=_flex(doc, "flexible_end_time_range"),
        overtime_starts_after=int(require_range(doc.get("overtime_starts_after", 0), "overtime_starts_after", minimum=0)),
        max_overtime_hours_per_day=require_range(
            doc.get("max_overtime_hours_per_day", 4), "max_overtime_hours_per_day", minimum=0, maximum=24
        ),
        hours_per_day=require_range(doc.get("hours_per_day", 8), "hours_per_day", minimum=0, maximum=24),
        applicable_departments=_strings(doc, "applicable_departments"),
        applicable_positions=_strings(doc, "applicable_positions"),
        applicable_employment_types=_strings(doc, "applicable_employment_types"),
        is_active=bool(doc.get("is_active", True)),
        effective_date=_date(doc, "effective_date"),
        expiry_date=_date(doc, "expiry_date"),
    )


def _overtime_rule(doc: Document) -> OvertimeRule:
    conditions = doc.get("conditions") or {}
    return OvertimeRule(
        type=_enum(OvertimeType, doc.get("type"), "rules.type"),
        rate=require_range(doc.get("rate"), "rules.rate", minimum=1, maximum=10),
        conditions=OvertimeConditions(
            min_hours=require_optional_range(conditions.get("min_hours"), "min_hours", minimum=0, maximum=24),
            max_hours_per_day=require_optional_range(
                conditions.get("max_hours_per_day"), "max_hours_per_day", minimum=0, maximum=24
            ),
            max_hours_per_week=require_optional_range(
                conditions.get("max_hours_per_week"), "max_hours_per_week", minimum=0, maximum=168
            ),
            max_hours_per_month=require_optional_range(
                conditions.get("max_hours_per_month"), "max_hours_per_month", minimum=0, maximum=744
            ),
            rounding_minutes=require_optional_range(
                conditions.get("rounding_minutes"), "rounding_minutes", minimum=1, maximum=60
            ),
        ),
    )


def parse_overtime_policy(doc: Document) -> OvertimePolicy:
    rules = require_non_empty_list(doc.get("rules") or [], "rules")
    return OvertimePolicy(
        policy_id=_id(doc, "id"),
        code=_id(doc, "code"),
        name=str(doc.get("name") or doc["code"]),
        rules=tuple(_overtime_rule(r) for r in rules),
        requires_approval=bool(doc.get("requires_approval", False)),
        approval_threshold_hours=require_optional_range(
            doc.get("approval_threshold_hours"), "approval_threshold_hours", minimum=0, maximum=24
        ),
        auto_approve_under=require_optional_range(doc.get("auto_approve_under"), "auto_approve_under", minimum=0, maximum=24),
        holiday_rate=require_range(doc.get("holiday_rate", 3.0), "holiday_rate", minimum=1, maximum=10),
        weekend_rate=require_range(doc.get("weekend_rate", 2.0), "weekend_rate", minimum=1, maximum=10),
        night_shift_rate=require_optional_range(doc.get("night_shift_rate"), "night_shift_rate", minimum=0, maximum=5),
        eligible_employee_types=_strings(doc, "eligible_employee_types"),
        eligible_positions=_strings(doc, "eligible_positions"),
        eligible_departments=_strings(doc, "eligible_departments"),
        is_active=bool(doc.get("is_active", True)),
        effective_date=_date(doc, "effective_date"),
        expiry_date=_date(doc, "expiry_date"),
    )


def _progressive_rule(doc: Document) -> ProgressivePenaltyRule:
    start = int(require_range(doc.get("from_occurrence"), "from_occurrence", minimum=1))
    end = require_optional_range(doc.get("to_occurrence"), "to_occurrence", minimum=start)
    return ProgressivePenaltyRule(
        from_occurrence=start,
        to_occurrence=int(end) if end is not None else None,
        amount=require_range(doc.get("amount", 0), "amount", minimum=0),
        percentage=require_optional_range(doc.get("percentage"), "percentage", minimum=0, maximum=100),
        description=doc.get("description"),
    )


def parse_penalty_policy(doc: Document) -> PenaltyPolicy:
    threshold = doc.get("threshold") or {}
    return PenaltyPolicy(
        policy_id=_id(doc, "id"),
        code=_id(doc, "code"),
        name=str(doc.get("name") or doc["code"]),
        type=_enum(PenaltyType, doc.get("type"), "type"),
        calculation_type=_enum(PenaltyCalculationType, doc.get("calculation_type"), "calculation_type"),
        amount=require_optional_range(doc.get("amount"), "amount", minimum=0),
        percentage=require_optional_range(doc.get("percentage"), "percentage", minimum=0, maximum=100),
        hourly_rate_multiplier=require_optional_range(doc.get("hourly_rate_multiplier"), "hourly_rate_multiplier", minimum=0),
        daily_rate_multiplier=require_optional_range(doc.get("daily_rate_multiplier"), "daily_rate_multiplier", minimum=0),
        threshold=PenaltyThreshold(
            minutes=require_optional_range(threshold.get("minutes"), "threshold.minutes", minimum=0),
            occurrences=require_optional_range(threshold.get("occurrences"), "threshold.occurrences", minimum=0),
            days=require_optional_range(threshold.get("days"), "threshold.days", minimum=0),
        ),
        grace_period_minutes=require_optional_range(doc.get("grace_period_minutes"), "grace_period_minutes", minimum=0),
        grace_occurrences=require_optional_range(doc.get("grace_occurrences"), "grace_occurrences", minimum=0),
        is_progressive=bool(doc.get("is_progressive", False)),
        progressive_rules=tuple(_progressive_rule(r) for r in doc.get("progressive_rules") or []),
        applicable_departments=_strings(doc, "applicable_departments"),
        applicable_positions=_strings(doc, "applicable_positions"),
        applicable_employment_types=_strings(doc, "applicable_employment_types"),
        auto_apply=bool(doc.get("auto_apply", True)),
        requires_approval=bool(doc.get("requires_approval", False)),
        max_penalty_per_month=require_optional_range(doc.get("max_penalty_per_month"), "max_penalty_per_month", minimum=0),
        max_occurrences_per_month=require_optional_range(
            doc.get("max_occurrences_per_month"), "max_occurrences_per_month", minimum=0
        ),
        is_active=bool(doc.get("is_active", True)),
        effective_date=_date(doc, "effective_date"),
        expiry_date=_date(doc, "expiry_date"),
    )


def parse_public_holiday(doc: Document) -> PublicHoliday:
    return PublicHoliday(
        holiday_id=_id(doc, "id"),
        name=require_non_empty(doc.get("name"), "name"),
        date=_date(doc, "date", required=True),
        type=_enum(HolidayType, doc.get("type", HolidayType.NATIONAL.value), "type"),
        work_policy=_enum(HolidayWorkPolicy, doc.get("work_policy", HolidayWorkPolicy.NO_WORK.value), "work_policy"),
        overtime_rate=require_range(doc.get("overtime_rate", 3.0), "overtime_rate", minimum=1, maximum=10),
        is_substitute_day=bool(doc.get("is_substitute_day", False)),
        original_date=_date(doc, "original_date"),
        locations=_strings(doc, "locations"),
        regions=_strings(doc, "regions"),
        applicable_departments=_strings(doc, "applicable_departments"),
        applicable_positions=_strings(doc, "applicable_positions"),
        is_active=bool(doc.get("is_active", True)),
    )


def parse_shift(doc: Document) -> Shift:
    start = _time(doc.get("start_time"), "start_time")
    end = _time(doc.get("end_time"), "end_time")
    breaks = tuple(
        ShiftBreak(
            name=str(b.get("name") or "Break"),
            start_time=_time(b.get("start_time"), "breaks.start_time"),
            duration=int(require_range(b.get("duration"), "breaks.duration", minimum=0, maximum=480)),
        )
        for b in doc.get("breaks") or []
    )
    gross = calculate_gross_hours(start, end)
    work = calculate_work_hours(start, end, breaks)
    for key, derived in (("gross_hours", gross), ("work_hours", work)):
        declared = doc.get(key)
        if declared is not None and abs(float(declared) - derived) > 0.01:
            raise ValidationError(f"{key} {declared} does not match shift times ({derived:.2f})")
    return Shift(
        shift_id=_id(doc, "id"),
        code=_id(doc, "code"),
        name=str(doc.get("name") or doc["code"]),
        start_time=start,
        end_time=end,
        breaks=breaks,
        gross_hours=gross,
        work_hours=work,
        premium_rate=require_range(doc.get("premium_rate", 0.0), "premium_rate", minimum=0),
        night_shift_bonus=require_range(doc.get("night_shift_bonus", 0.0), "night_shift_bonus", minimum=0),
        applicable_days=require_weekdays(doc.get("applicable_days", list(ALL_DAYS)), "applicable_days"),
        is_active=bool(doc.get("is_active", True)),
        effective_date=_date(doc, "effective_date"),
        expiry_date=_date(doc, "expiry_date"),
    )


def _rotation(doc: Optional[Document]) -> Optional[RotationPattern]:
    if not doc:
        return None
    sequence = require_non_empty_list(doc.get("sequence") or [], "rotation_pattern.sequence")
    return RotationPattern(
        sequence=tuple(str(code) for code in sequence),
        cycle_days=int(require_range(doc.get("cycle_days"), "rotation_pattern.cycle_days", minimum=1)),
        start_date=_date(doc, "start_date", required=True),
        type=_enum(RotationType, doc.get("type", RotationType.CUSTOM.value), "rotation_pattern.type"),
    )


def parse_shift_assignment(doc: Document) -> ShiftAssignment:
    start = _date(doc, "start_date", required=True)
    end = _date(doc, "end_date")
    if end is not None and end < start:
        raise ValidationError("end_date must not be before start_date")
    rotation = _rotation(doc.get("rotation_pattern"))
    is_rotational = bool(doc.get("is_rotational", False))
    if is_rotational and rotation is None:
        raise ValidationError("rotational assignment requires a rotation_pattern")
    return ShiftAssignment(
        assignment_id=_id(doc, "id"),
        employee_id=_id(doc, "employee_id"),
        shift_id=_id(doc, "shift_id"),
        shift_code=doc.get("shift_code"),
        start_date=start,
        end_date=end,
        work_days=require_weekdays(doc.get("work_days", [1, 2, 3, 4, 5]), "work_days"),
        rotation_pattern=rotation,
        is_permanent=bool(doc.get("is_permanent", not is_rotational)),
        is_rotational=is_rotational,
        is_active=bool(doc.get("is_active", True)),
        notes=doc.get("notes"),
    )


def parse_geofence(doc: Document) -> GeofenceConfig:
    return GeofenceConfig(
        geofence_id=_id(doc, "id"),
        name=require_non_empty(doc.get("name"), "name"),
        latitude=require_range(doc.get("latitude"), "latitude", minimum=-90, maximum=90),
        longitude=require_range(doc.get("longitude"), "longitude", minimum=-180, maximum=180),
        radius_meters=require_range(doc.get("radius_meters"), "radius_meters", minimum=10, maximum=10000),
        enforce_for_clock_in=bool(doc.get("enforce_for_clock_in", True)),
        enforce_for_clock_out=bool(doc.get("enforce_for_clock_out", False)),
        allowed_departments=_strings(doc, "allowed_departments"),
        allowed_employment_types=_strings(doc, "allowed_employment_types"),
        is_active=bool(doc.get("is_active", True)),
    )
