from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import is_weekend, iter_days, normalize_date
from ..core.enums import HolidayWorkPolicy
from ..core.exceptions import ValidationError
from .model import HolidayCheckResult, PublicHoliday, WorkingDaysResult


def _matches(allow_list: tuple[str, ...], value: Optional[str]) -> bool:
    # An unspecified value does not restrict; an empty list applies everywhere.
    return value is None or not allow_list or value in allow_list


class HolidayCalendar:
    """Holiday lookups over a preloaded, read-only set of holidays.

    The holidays for the whole range are loaded once by the caller; range
    calculations then iterate purely in memory.
    """

    def __init__(self, holidays: Iterable[PublicHoliday]):
        by_date: dict[date, list[PublicHoliday]] = defaultdict(list)
        for h in holidays:
            if h.is_active:
                by_date[normalize_date(h.date)].append(h)
        self._by_date = {d: tuple(items) for d, items in by_date.items()}

    def holidays_on(self, day: date) -> tuple[PublicHoliday, ...]:
        return self._by_date.get(normalize_date(day), ())

    def is_holiday(
        self,
        day: date,
        location: Optional[str] = None,
        region: Optional[str] = None,
        department: Optional[str] = None,
    ) -> HolidayCheckResult:
        for holiday in self.holidays_on(day):
            if (
                _matches(holiday.locations, location)
                and _matches(holiday.regions, region)
                and _matches(holiday.applicable_departments, department)
            ):
                return HolidayCheckResult(
                    is_holiday=True,
                    work_policy=holiday.work_policy,
                    is_paid_leave=True,
                    holiday=holiday,
                    holiday_name=holiday.name,
                    overtime_rate=holiday.overtime_rate,
                )
        return HolidayCheckResult(is_holiday=False, work_policy=HolidayWorkPolicy.OPTIONAL, is_paid_leave=False)

    def calculate_working_days(
        self,
        start: date,
        end: date,
        include_weekends: bool = False,
        location: Optional[str] = None,
        region: Optional[str] = None,
        department: Optional[str] = None,
    ) -> WorkingDaysResult:
        """Classify every day of [start, end].

        With ``include_weekends=False`` a weekend day only counts under
        ``weekend_days``, even when it is also a holiday.
        """
        start, end = normalize_date(start), normalize_date(end)
        if end < start:
            raise ValidationError("end date must not be before start date")

        total = working = weekend = 0
        holiday_dates: list[date] = []
        for day in iter_days(start, end):
            total += 1
            if is_weekend(day):
                weekend += 1
                if not include_weekends:
                    continue
            if self.is_holiday(day, location, region, department).is_holiday:
                holiday_dates.append(day)
            else:
                working += 1

        return WorkingDaysResult(
            total_days=total,
            working_days=working,
            weekend_days=weekend,
            holidays=len(holiday_dates),
            holiday_dates=tuple(holiday_dates),
        )

    def holidays_in_range(self, start: date, end: date) -> list[PublicHoliday]:
        start, end = normalize_date(start), normalize_date(end)
        return [h for d in sorted(self._by_date) if start <= d <= end for h in self._by_date[d]]
