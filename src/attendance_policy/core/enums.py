from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Outcome of a clock-in/clock-out validation."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    EARLY_ARRIVAL = "EARLY_ARRIVAL"
    FLEXIBLE = "FLEXIBLE"
    OVERTIME = "OVERTIME"
    NON_WORKING_DAY = "NON_WORKING_DAY"


class OvertimeType(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    AFTER_HOURS = "after-hours"


class PenaltyType(str, Enum):
    LATE = "late"
    ABSENCE = "absence"
    EARLY_LEAVE = "early-leave"
    NO_CLOCK_IN = "no-clock-in"
    NO_CLOCK_OUT = "no-clock-out"
    VIOLATION = "violation"


class PenaltyCalculationType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    HOURLY_RATE = "hourly-rate"
    DAILY_RATE = "daily-rate"
    PROGRESSIVE = "progressive"


class HolidayType(str, Enum):
    NATIONAL = "national"
    REGIONAL = "regional"
    COMPANY = "company"
    SUBSTITUTE = "substitute"


class HolidayWorkPolicy(str, Enum):
    """Whether employees may (or must) work on a holiday."""

    NO_WORK = "no-work"
    OPTIONAL = "optional"
    REQUIRED = "required"
    OVERTIME_ONLY = "overtime-only"


class RotationType(str, Enum):
    FIXED = "fixed"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"
