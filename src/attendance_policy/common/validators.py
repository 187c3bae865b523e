from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.exceptions import ValidationError
from .datetime_utils import time_to_minutes


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_time_string(value: str, field_name: str) -> str:
    try:
        time_to_minutes(value)
    except ValidationError as exc:
        raise ValidationError(f"{field_name}: {exc}") from exc
    return value.strip()


def require_range(value, field_name: str, *, minimum: float | None = None, maximum: float | None = None) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field_name} must be <= {maximum}")
    return value


def require_optional_range(value, field_name: str, *, minimum: float | None = None, maximum: float | None = None) -> Optional[float]:
    if value is None:
        return None
    return require_range(value, field_name, minimum=minimum, maximum=maximum)


def require_non_empty_list(values: Sequence, field_name: str) -> Sequence:
    if not values:
        raise ValidationError(f"{field_name} must contain at least one item")
    return values


def require_weekdays(values: Iterable[int], field_name: str) -> frozenset[int]:
    days = set()
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 6:
            raise ValidationError(f"{field_name} contains an invalid weekday: {v!r}")
        days.add(v)
    return frozenset(days)
