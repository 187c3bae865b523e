from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Mapping

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.employee import EmployeeContext
from ..container import Container
from ..core.enums import OvertimeType, PenaltyType
from ..core.exceptions import DomainError, NotFoundError, RuleNotFoundError, ValidationError
from ..overtime.calculator import overtime_type_for
from ..penalties.model import Violation

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    """Plain JSON structure for result records (enums by value, ISO dates)."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {to_json(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_json(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _required(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ValidationError(f"{key} is required")
    return value


def _date(data: Mapping[str, Any], key: str) -> date:
    return parse_iso_date(str(_required(data, key)))


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if isinstance(value, str):
        return value.lower() in {"1", "true", "yes"}
    return bool(value)


def _enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"{key} must be one of: {', '.join(e.value for e in enum_cls)}") from exc


def _employee(data: Mapping[str, Any]) -> EmployeeContext:
    return EmployeeContext(
        employee_id=data.get("employee_id"),
        department=data.get("department"),
        position=data.get("position"),
        employment_type=data.get("employment_type"),
        base_salary=data.get("base_salary"),
    )


def _error(exc: DomainError, status: int):
    logger.warning("%s %s -> %d %s: %s", request.method, request.path, status, type(exc).__name__, exc)
    return jsonify({"error": type(exc).__name__, "message": str(exc)}), status


def register(app: Flask, container: Container) -> None:
    repository = container.repository

    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        return _error(exc, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError):
        return _error(exc, 404)

    @app.errorhandler(RuleNotFoundError)
    def handle_rule_not_found(exc: RuleNotFoundError):
        return _error(exc, 422)

    def schedule_policy(policy_id: str):
        policy = repository.get_work_schedule_policy(policy_id)
        if not policy:
            raise NotFoundError(f"Work schedule policy {policy_id} not found")
        return policy

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"status": "ok", "tenant_id": app.config.get("TENANT_ID"), "records": repository.counts()})

    # --- Work schedule ---

    @app.route("/api/schedules/<policy_id>/clock-in", methods=["POST"], endpoint="api_schedule_clock_in")
    def api_schedule_clock_in(policy_id: str):
        data = _payload()
        result = container.work_schedule_evaluator.validate_clock_in(
            schedule_policy(policy_id), _required(data, "time"), _date(data, "date")
        )
        return jsonify(to_json(result))

    @app.route("/api/schedules/<policy_id>/clock-out", methods=["POST"], endpoint="api_schedule_clock_out")
    def api_schedule_clock_out(policy_id: str):
        data = _payload()
        result = container.work_schedule_evaluator.validate_clock_out(
            schedule_policy(policy_id), _required(data, "time"), _date(data, "date")
        )
        return jsonify(to_json(result))

    # --- Overtime ---

    @app.route("/api/overtime/<policy_id>/calculate", methods=["POST"], endpoint="api_overtime_calculate")
    def api_overtime_calculate(policy_id: str):
        policy = repository.get_overtime_policy(policy_id)
        if not policy:
            raise NotFoundError(f"Overtime policy {policy_id} not found")

        data = _payload()
        if data.get("type"):
            overtime_type = _enum(OvertimeType, data["type"], "type")
        else:
            # derive from the calendar when the caller only knows the date
            day = _date(data, "date")
            overtime_type = overtime_type_for(day, container.holiday_calendar.is_holiday(day).is_holiday)

        result = container.overtime_calculator.calculate(
            policy, _required(data, "hours"), overtime_type, _required(data, "hourly_rate")
        )
        return jsonify(to_json(result))

    # --- Penalties ---

    @app.route("/api/penalties/<policy_id>/calculate", methods=["POST"], endpoint="api_penalty_calculate")
    def api_penalty_calculate(policy_id: str):
        policy = repository.get_penalty_policy(policy_id)
        if not policy:
            raise NotFoundError(f"Penalty policy {policy_id} not found")

        data = _payload()
        violation = Violation(
            type=_enum(PenaltyType, data.get("type", policy.type.value), "type"),
            minutes_late=data.get("minutes_late"),
            occurrence_count=data.get("occurrence_count"),
            employee_salary=data.get("employee_salary"),
            hourly_rate=data.get("hourly_rate"),
            daily_rate=data.get("daily_rate"),
            employee_id=data.get("employee_id"),
            date=parse_iso_date(data["date"]) if data.get("date") else None,
        )
        return jsonify(to_json(container.penalty_calculator.calculate(policy, violation)))

    # --- Holidays ---

    @app.route("/api/holidays/check", methods=["GET"], endpoint="api_holiday_check")
    def api_holiday_check():
        args = request.args
        result = container.holiday_calendar.is_holiday(
            _date(args, "date"),
            location=args.get("location"),
            region=args.get("region"),
            department=args.get("department"),
        )
        return jsonify(to_json(result))

    @app.route("/api/holidays/working-days", methods=["GET"], endpoint="api_holiday_working_days")
    def api_holiday_working_days():
        args = request.args
        result = container.holiday_calendar.calculate_working_days(
            _date(args, "start"),
            _date(args, "end"),
            include_weekends=_flag(args, "include_weekends"),
            location=args.get("location"),
            region=args.get("region"),
            department=args.get("department"),
        )
        return jsonify(to_json(result))

    # --- Shifts ---

    @app.route("/api/shifts/current", methods=["GET"], endpoint="api_shift_current")
    def api_shift_current():
        args = request.args
        info = container.shift_scheduler.get_current_shift(_required(args, "employee_id"), _date(args, "date"))
        return jsonify({"shift": to_json(info)})

    @app.route("/api/shifts/schedule", methods=["GET"], endpoint="api_shift_schedule")
    def api_shift_schedule():
        args = request.args
        schedule = container.shift_scheduler.get_schedule(
            _required(args, "employee_id"), _date(args, "start"), _date(args, "end")
        )
        return jsonify({"days": to_json(schedule)})

    # --- Geofence ---

    def _coordinates(data: Mapping[str, Any]) -> tuple[float, float]:
        return _required(data, "latitude"), _required(data, "longitude")

    @app.route("/api/geofence/clock-in", methods=["POST"], endpoint="api_geofence_clock_in")
    def api_geofence_clock_in():
        data = _payload()
        latitude, longitude = _coordinates(data)
        result = container.geofence_validator.validate_clock_in(latitude, longitude, _employee(data))
        return jsonify(to_json(result))

    @app.route("/api/geofence/clock-out", methods=["POST"], endpoint="api_geofence_clock_out")
    def api_geofence_clock_out():
        data = _payload()
        latitude, longitude = _coordinates(data)
        result = container.geofence_validator.validate_clock_out(latitude, longitude, _employee(data))
        return jsonify(to_json(result))

