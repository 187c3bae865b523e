from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Protocol, Sequence

from ..geofence.model import GeofenceConfig
from ..holidays.model import PublicHoliday
from ..overtime.model import OvertimePolicy
from ..penalties.model import PenaltyPolicy
from ..schedules.model import WorkSchedulePolicy
from ..shifts.model import Shift, ShiftAssignment


class PolicyRepository(Protocol):
    """Read-only lookups of every policy record the evaluators consume."""

    def get_work_schedule_policy(self, policy_id: str) -> Optional[WorkSchedulePolicy]:
        raise NotImplementedError

    def get_overtime_policy(self, policy_id: str) -> Optional[OvertimePolicy]:
        raise NotImplementedError

    def get_penalty_policy(self, policy_id: str) -> Optional[PenaltyPolicy]:
        raise NotImplementedError

    def list_penalty_policies(self) -> Sequence[PenaltyPolicy]:
        raise NotImplementedError

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def get_shift_by_code(self, code: str) -> Optional[Shift]:
        raise NotImplementedError

    def list_assignments_for_employee(self, employee_id: str) -> Sequence[ShiftAssignment]:
        raise NotImplementedError

    def list_holidays(self, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[PublicHoliday]:
        raise NotImplementedError

    def list_geofences(self) -> Sequence[GeofenceConfig]:
        raise NotImplementedError

    def counts(self) -> dict[str, int]:
        raise NotImplementedError


@dataclass(frozen=True)
class SnapshotPolicyRepository:
    """In-memory policy snapshot, loaded once per batch and never mutated."""

    work_schedule_policies: tuple[WorkSchedulePolicy, ...] = ()
    overtime_policies: tuple[OvertimePolicy, ...] = ()
    penalty_policies: tuple[PenaltyPolicy, ...] = ()
    shifts: tuple[Shift, ...] = ()
    shift_assignments: tuple[ShiftAssignment, ...] = ()
    holidays: tuple[PublicHoliday, ...] = ()
    geofences: tuple[GeofenceConfig, ...] = field(default_factory=tuple)

    def get_work_schedule_policy(self, policy_id: str) -> Optional[WorkSchedulePolicy]:
        return next((p for p in self.work_schedule_policies if p.policy_id == policy_id), None)

    def get_overtime_policy(self, policy_id: str) -> Optional[OvertimePolicy]:
        return next((p for p in self.overtime_policies if p.policy_id == policy_id), None)

    def get_penalty_policy(self, policy_id: str) -> Optional[PenaltyPolicy]:
        return next((p for p in self.penalty_policies if p.policy_id == policy_id), None)

    def list_penalty_policies(self) -> Sequence[PenaltyPolicy]:
        return self.penalty_policies

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        return next((s for s in self.shifts if s.shift_id == shift_id), None)

    def get_shift_by_code(self, code: str) -> Optional[Shift]:
        return next((s for s in self.shifts if s.code == code and s.is_active), None)

    def list_assignments_for_employee(self, employee_id: str) -> Sequence[ShiftAssignment]:
        return [a for a in self.shift_assignments if a.employee_id == employee_id]

    def list_holidays(self, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[PublicHoliday]:
        return [
            h
            for h in self.holidays
            if (start is None or h.date >= start) and (end is None or h.date <= end)
        ]

    def list_geofences(self) -> Sequence[GeofenceConfig]:
        return self.geofences

    def counts(self) -> dict[str, int]:
        return {
            "work_schedule_policies": len(self.work_schedule_policies),
            "overtime_policies": len(self.overtime_policies),
            "penalty_policies": len(self.penalty_policies),
            "shifts": len(self.shifts),
            "shift_assignments": len(self.shift_assignments),
            "holidays": len(self.holidays),
            "geofences": len(self.geofences),
        }
