from pathlib import Path

import pytest
from flask import Flask

import config.testing as testing_settings
from attendance_policy.api.controller import register
from attendance_policy.container import build_container
from attendance_policy.core.exceptions import ConfigurationError
from attendance_policy.main import create_app
from attendance_policy.snapshot.loader import load_snapshot

SAMPLE = Path(__file__).resolve().parents[2] / "examples" / "policy_snapshot.yaml"


@pytest.fixture
def client():
    app = Flask(__name__)
    app.config["TENANT_ID"] = "acme"
    register(app, build_container(repository=load_snapshot(SAMPLE, "acme")))
    return app.test_client()


def test_health(client):
    body = client.get("/api/health").get_json()

    assert body["status"] == "ok"
    assert body["tenant_id"] == "acme"
    assert body["records"]["shifts"] == 3


def test_clock_in_late(client):
    resp = client.post("/api/schedules/ws-office/clock-in", json={"time": "10:30", "date": "2025-01-06"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "LATE"
    assert body["minutes_late"] == 90


def test_clock_in_flexible(client):
    body = client.post("/api/schedules/ws-office/clock-in", json={"time": "09:40", "date": "2025-01-06"}).get_json()

    assert body["status"] == "FLEXIBLE"


def test_clock_out_overtime(client):
    body = client.post("/api/schedules/ws-office/clock-out", json={"time": "19:00", "date": "2025-01-06"}).get_json()

    assert body["status"] == "OVERTIME"
    assert body["overtime_minutes"] == 60


def test_unknown_policy_is_404(client):
    resp = client.post("/api/schedules/nope/clock-in", json={"time": "09:00", "date": "2025-01-06"})

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFoundError"


def test_bad_time_is_400(client):
    resp = client.post("/api/schedules/ws-office/clock-in", json={"time": "9 o'clock", "date": "2025-01-06"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def test_missing_field_is_400(client):
    assert client.post("/api/schedules/ws-office/clock-in", json={"time": "09:00"}).status_code == 400


def test_overtime_with_explicit_type(client):
    resp = client.post("/api/overtime/ot-standard/calculate", json={"hours": 1.4, "type": "weekday", "hourly_rate": 100})

    body = resp.get_json()
    assert body["hours"] == 1.0
    assert body["amount"] == 150.0
    assert body["type"] == "weekday"


def test_overtime_type_from_holiday_calendar(client):
    body = client.post(
        "/api/overtime/ot-standard/calculate", json={"hours": 2, "date": "2025-01-01", "hourly_rate": 100}
    ).get_json()

    assert body["type"] == "holiday"
    assert body["amount"] == 600.0


def test_overtime_missing_rule_is_422(client):
    resp = client.post("/api/overtime/ot-standard/calculate", json={"hours": 1, "type": "after-hours", "hourly_rate": 100})

    assert resp.status_code == 422
    assert resp.get_json()["error"] == "RuleNotFoundError"


def test_progressive_penalty(client):
    body = client.post("/api/penalties/pen-late/calculate", json={"minutes_late": 20, "occurrence_count": 3}).get_json()

    assert body["should_apply"]
    assert body["amount"] == 100000.0
    assert body["details"]["calculation_type"] == "fixed"


def test_penalty_type_mismatch_is_422(client):
    resp = client.post("/api/penalties/pen-late/calculate", json={"type": "early-leave", "minutes_late": 20})

    assert resp.status_code == 422


@pytest.mark.parametrize("minutes_late", ["20", -5])
def test_penalty_with_malformed_minutes_is_400(client, minutes_late):
    resp = client.post("/api/penalties/pen-late/calculate", json={"minutes_late": minutes_late})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"


def test_holiday_check(client):
    body = client.get("/api/holidays/check?date=2025-01-01").get_json()

    assert body["is_holiday"]
    assert body["holiday"]["date"] == "2025-01-01"
    assert body["work_policy"] == "no-work"


def test_working_days(client):
    body = client.get("/api/holidays/working-days?start=2025-01-01&end=2025-01-07").get_json()

    assert body["total_days"] == 7
    assert body["weekend_days"] == 2
    assert body["holiday_dates"] == ["2025-01-01"]
    assert body["working_days"] == 4


def test_current_shift_rotation(client):
    body = client.get("/api/shifts/current?employee_id=emp-2&date=2025-01-08").get_json()

    assert body["shift"]["rotation_code"] == "C"
    assert body["shift"]["shift"]["name"] == "Night"


def test_current_shift_none(client):
    assert client.get("/api/shifts/current?employee_id=emp-1&date=2025-01-04").get_json() == {"shift": None}


def test_schedule(client):
    body = client.get("/api/shifts/schedule?employee_id=emp-1&start=2025-01-06&end=2025-01-12").get_json()

    assert len(body["days"]) == 7
    assert body["days"][0]["shift"]["code"] == "A"
    assert body["days"][5]["shift"] is None


def test_geofence_clock_in_outside(client):
    body = client.post("/api/geofence/clock-in", json={"latitude": 10.80, "longitude": 106.7009}).get_json()

    assert not body["is_within_geofence"]
    assert body["geofence_id"] == "geo-hq"


def test_geofence_clock_out_not_enforced(client):
    body = client.post("/api/geofence/clock-out", json={"latitude": 10.80, "longitude": 106.7009}).get_json()

    assert body["is_within_geofence"]
    assert not body["is_enforced"]


def test_geofence_invalid_latitude(client):
    assert client.post("/api/geofence/clock-in", json={"latitude": 120, "longitude": 0}).status_code == 400


def test_create_app_from_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(testing_settings, "TENANT_ID", "acme")
    monkeypatch.setattr(testing_settings, "POLICY_SNAPSHOT_PATH", str(SAMPLE))

    app = create_app()

    assert app.config["TESTING"]
    assert app.test_client().get("/api/health").get_json()["records"]["geofences"] == 1


def test_create_app_requires_tenant(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(testing_settings, "TENANT_ID", None)

    with pytest.raises(ConfigurationError):
        create_app()
