from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

from ..core.constants import MINUTES_PER_DAY, WEEKEND_DAYS
from ..core.exceptions import ValidationError

TimeLike = Union[str, time]

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def time_to_minutes(value: TimeLike) -> int:
    """Minutes since midnight for an ``HH:mm`` string or a ``time``."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time of day: {value!r}")
    m = _HHMM.match(value.strip())
    if not m:
        raise ValidationError(f"Invalid time of day: {value!r} (expected HH:mm)")
    return int(m.group(1)) * 60 + int(m.group(2))


def minutes_to_time(minutes: int) -> str:
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_date(value: date | datetime) -> date:
    """Calendar date (local midnight) of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Invalid date: {value!r}")


def weekday_index(value: date | datetime) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return normalize_date(value).isoweekday() % 7


def is_weekend(value: date | datetime) -> bool:
    return weekday_index(value) in WEEKEND_DAYS


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both inclusive."""
    current = normalize_date(start)
    last = normalize_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
