from datetime import date

import pytest

from attendance_policy.core.enums import HolidayWorkPolicy
from attendance_policy.core.exceptions import ValidationError
from attendance_policy.holidays.calendar import HolidayCalendar
from attendance_policy.holidays.model import PublicHoliday

NEW_YEAR = PublicHoliday(holiday_id="h1", name="New Year", date=date(2025, 1, 1))
HQ_ONLY = PublicHoliday(
    holiday_id="h2",
    name="Founding day",
    date=date(2025, 1, 8),
    work_policy=HolidayWorkPolicy.OPTIONAL,
    overtime_rate=2.0,
    locations=("HQ",),
)
SATURDAY_HOLIDAY = PublicHoliday(holiday_id="h3", name="Saturday holiday", date=date(2025, 1, 11))
INACTIVE = PublicHoliday(holiday_id="h4", name="Cancelled", date=date(2025, 1, 9), is_active=False)


def _calendar() -> HolidayCalendar:
    return HolidayCalendar([NEW_YEAR, HQ_ONLY, SATURDAY_HOLIDAY, INACTIVE])


def test_holiday_result_carries_policy_and_rate():
    result = _calendar().is_holiday(date(2025, 1, 1))

    assert result.is_holiday
    assert result.is_paid_leave
    assert result.holiday_name == "New Year"
    assert result.work_policy == HolidayWorkPolicy.NO_WORK
    assert result.overtime_rate == 3.0


def test_regular_day_is_optional_and_unpaid():
    result = _calendar().is_holiday(date(2025, 1, 2))

    assert not result.is_holiday
    assert not result.is_paid_leave
    assert result.work_policy == HolidayWorkPolicy.OPTIONAL
    assert result.holiday is None


def test_location_filter():
    calendar = _calendar()

    assert calendar.is_holiday(date(2025, 1, 8), location="HQ").is_holiday
    assert not calendar.is_holiday(date(2025, 1, 8), location="Branch").is_holiday


def test_missing_filter_does_not_restrict():
    assert _calendar().is_holiday(date(2025, 1, 8)).is_holiday


def test_inactive_holiday_ignored():
    assert not _calendar().is_holiday(date(2025, 1, 9)).is_holiday


def test_working_days_exclude_weekends_and_holidays():
    # Wed 2025-01-01 .. Tue 2025-01-14
    result = _calendar().calculate_working_days(date(2025, 1, 1), date(2025, 1, 14), location="HQ")

    assert result.total_days == 14
    assert result.weekend_days == 4
    assert result.holidays == 2
    assert result.holiday_dates == (date(2025, 1, 1), date(2025, 1, 8))
    assert result.working_days == 8


def test_working_days_including_weekends_counts_weekend_holiday():
    result = _calendar().calculate_working_days(date(2025, 1, 1), date(2025, 1, 14), include_weekends=True)

    assert result.weekend_days == 4
    assert result.holiday_dates == (date(2025, 1, 1), date(2025, 1, 8), date(2025, 1, 11))
    assert result.working_days == 11


def test_working_days_are_additive_over_adjacent_ranges():
    calendar = _calendar()
    whole = calendar.calculate_working_days(date(2025, 1, 1), date(2025, 1, 31))
    first = calendar.calculate_working_days(date(2025, 1, 1), date(2025, 1, 10))
    second = calendar.calculate_working_days(date(2025, 1, 11), date(2025, 1, 31))

    assert whole.working_days == first.working_days + second.working_days
    assert whole.total_days == first.total_days + second.total_days


def test_single_day_range():
    result = _calendar().calculate_working_days(date(2025, 1, 2), date(2025, 1, 2))

    assert result.total_days == 1
    assert result.working_days == 1


def test_reversed_range_raises():
    with pytest.raises(ValidationError):
        _calendar().calculate_working_days(date(2025, 1, 10), date(2025, 1, 1))


def test_holidays_in_range_sorted():
    names = [h.name for h in _calendar().holidays_in_range(date(2025, 1, 1), date(2025, 1, 10))]

    assert names == ["New Year", "Founding day"]
