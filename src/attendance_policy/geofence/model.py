from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GeofenceConfig:
    """Circular perimeter around an approved attendance location."""

    geofence_id: str
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    enforce_for_clock_in: bool = True
    enforce_for_clock_out: bool = False
    allowed_departments: tuple[str, ...] = field(default_factory=tuple)
    allowed_employment_types: tuple[str, ...] = field(default_factory=tuple)
    is_active: bool = True


@dataclass(frozen=True)
class GeofenceValidation:
    is_within_geofence: bool
    distance_meters: int
    geofence_id: str
    geofence_name: str
    message: str
    is_enforced: bool = True
