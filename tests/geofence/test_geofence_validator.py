import pytest

from attendance_policy.common.employee import EmployeeContext
from attendance_policy.core.exceptions import ValidationError
from attendance_policy.geofence.model import GeofenceConfig
from attendance_policy.geofence.validator import GeofenceValidator, format_distance, haversine_distance

HQ = GeofenceConfig(geofence_id="g-hq", name="HQ", latitude=10.7769, longitude=106.7009, radius_meters=200)
WAREHOUSE = GeofenceConfig(
    geofence_id="g-wh",
    name="Warehouse",
    latitude=10.8500,
    longitude=106.6200,
    radius_meters=500,
    enforce_for_clock_in=False,
    allowed_departments=("logistics",),
)


def test_haversine_known_distance():
    # one degree of latitude on a 6,371 km sphere
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(111_194.9, abs=0.5)
    assert haversine_distance(10, 20, 10, 20) == 0


def test_inside_radius():
    result = GeofenceValidator([HQ]).validate(10.7770, 106.7010)

    assert result.is_within_geofence
    assert result.geofence_id == "g-hq"
    assert result.distance_meters < 200
    assert isinstance(result.distance_meters, int)


def test_outside_radius():
    result = GeofenceValidator([HQ]).validate(10.7900, 106.7009)

    assert not result.is_within_geofence
    assert result.distance_meters > 1000
    assert "Outside HQ" in result.message


def test_boundary_is_inclusive():
    edge = GeofenceConfig(
        geofence_id="g-edge",
        name="Edge",
        latitude=0,
        longitude=0,
        radius_meters=haversine_distance(0, 0, 0.001, 0),
    )

    assert GeofenceValidator([edge]).validate(0.001, 0).is_within_geofence


def test_moving_away_never_enters():
    validator = GeofenceValidator([HQ])
    distances = []
    inside = []
    for step in range(10):
        result = validator.validate(10.7769 + step * 0.0005, 106.7009)
        distances.append(result.distance_meters)
        inside.append(result.is_within_geofence)

    assert distances == sorted(distances)
    first_outside = inside.index(False)
    assert not any(inside[first_outside:])


def test_nearest_applicable_geofence_is_chosen():
    validator = GeofenceValidator([HQ, WAREHOUSE])
    near_warehouse = (10.8501, 106.6201)

    assert validator.validate(*near_warehouse).geofence_id == "g-hq"
    logistics = EmployeeContext(department="logistics")
    assert validator.validate(*near_warehouse, employee=logistics).geofence_id == "g-wh"


def test_no_geofence_configured_passes():
    result = GeofenceValidator([]).validate(0, 0)

    assert result.is_within_geofence
    assert result.message == "No geofence configured"


def test_no_applicable_geofence_passes():
    result = GeofenceValidator([WAREHOUSE]).validate(0, 0, EmployeeContext(department="sales"))

    assert result.is_within_geofence
    assert result.message == "No applicable geofence"


def test_inactive_geofence_ignored():
    inactive = GeofenceConfig(geofence_id="g-x", name="Old", latitude=0, longitude=0, radius_meters=100, is_active=False)

    assert GeofenceValidator([inactive]).validate(50, 50).message == "No geofence configured"


def test_clock_out_not_enforced_by_default():
    validator = GeofenceValidator([HQ])

    clock_in = validator.validate_clock_in(10.7900, 106.7009)
    clock_out = validator.validate_clock_out(10.7900, 106.7009)

    assert not clock_in.is_within_geofence
    assert clock_in.is_enforced
    assert clock_out.is_within_geofence
    assert not clock_out.is_enforced
    assert clock_out.message.endswith("(not enforced)")


@pytest.mark.parametrize("lat,lon", [(91, 0), (-90.5, 0), (0, 181), (0, -180.1)])
def test_invalid_coordinates_raise(lat, lon):
    with pytest.raises(ValidationError):
        GeofenceValidator([HQ]).validate(lat, lon)


def test_format_distance():
    assert format_distance(150.4) == "150m"
    assert format_distance(2500) == "2.50km"
