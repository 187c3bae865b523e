from __future__ import annotations

from dataclasses import replace
from math import atan2, cos, radians, sin, sqrt
from typing import Iterable, Optional

from ..common.employee import EmployeeContext
from ..common.validators import require_range
from ..core.constants import EARTH_RADIUS_METERS
from .model import GeofenceConfig, GeofenceValidation

NO_GEOFENCE_CONFIGURED = "No geofence configured"
NO_APPLICABLE_GEOFENCE = "No applicable geofence"


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters."""
    phi1, phi2 = radians(lat1), radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)
    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * atan2(sqrt(a), sqrt(1 - a))


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.2f}km"


def _applies_to(geofence: GeofenceConfig, employee: Optional[EmployeeContext]) -> bool:
    if geofence.allowed_departments:
        if not employee or employee.department not in geofence.allowed_departments:
            return False
    if geofence.allowed_employment_types:
        if not employee or employee.employment_type not in geofence.allowed_employment_types:
            return False
    return True


def _pass_through(name: str) -> GeofenceValidation:
    return GeofenceValidation(
        is_within_geofence=True,
        distance_meters=0,
        geofence_id="",
        geofence_name=name,
        message=name,
        is_enforced=False,
    )


class GeofenceValidator:
    """Checks a coordinate against the nearest applicable geofence.

    Absent configuration never blocks attendance: with no configured or no
    applicable geofence the location passes.
    """

    def __init__(self, geofences: Iterable[GeofenceConfig]):
        self._geofences = tuple(g for g in geofences if g.is_active)

    def validate(self, latitude: float, longitude: float, employee: Optional[EmployeeContext] = None) -> GeofenceValidation:
        return self._evaluate(latitude, longitude, employee)[1]

    def _evaluate(
        self, latitude: float, longitude: float, employee: Optional[EmployeeContext]
    ) -> tuple[Optional[GeofenceConfig], GeofenceValidation]:
        require_range(latitude, "latitude", minimum=-90, maximum=90)
        require_range(longitude, "longitude", minimum=-180, maximum=180)

        if not self._geofences:
            return None, _pass_through(NO_GEOFENCE_CONFIGURED)

        nearest: Optional[GeofenceConfig] = None
        min_distance = float("inf")
        for geofence in self._geofences:
            if not _applies_to(geofence, employee):
                continue
            distance = haversine_distance(latitude, longitude, geofence.latitude, geofence.longitude)
            if distance < min_distance:
                nearest, min_distance = geofence, distance

        if nearest is None:
            return None, _pass_through(NO_APPLICABLE_GEOFENCE)

        is_within = min_distance <= nearest.radius_meters
        shown = round(min_distance)
        if is_within:
            message = f"Inside {nearest.name} ({shown} m)"
        else:
            message = f"Outside {nearest.name} ({shown} m, allowed {nearest.radius_meters:g} m)"
        return nearest, GeofenceValidation(
            is_within_geofence=is_within,
            distance_meters=shown,
            geofence_id=nearest.geofence_id,
            geofence_name=nearest.name,
            message=message,
        )

    def validate_clock_in(self, latitude: float, longitude: float, employee: Optional[EmployeeContext] = None) -> GeofenceValidation:
        return self._with_enforcement(*self._evaluate(latitude, longitude, employee), clock_in=True)

    def validate_clock_out(self, latitude: float, longitude: float, employee: Optional[EmployeeContext] = None) -> GeofenceValidation:
        return self._with_enforcement(*self._evaluate(latitude, longitude, employee), clock_in=False)

    @staticmethod
    def _with_enforcement(
        geofence: Optional[GeofenceConfig], validation: GeofenceValidation, *, clock_in: bool
    ) -> GeofenceValidation:
        if geofence is None:
            return validation
        enforced = geofence.enforce_for_clock_in if clock_in else geofence.enforce_for_clock_out
        if enforced:
            return validation
        return replace(
            validation,
            is_within_geofence=True,
            is_enforced=False,
            message=f"{validation.message} (not enforced)",
        )
