from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Shift, ShiftAssignment


class ShiftRepository(Protocol):
    def get_shift(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def get_shift_by_code(self, code: str) -> Optional[Shift]:
        raise NotImplementedError

    def list_assignments_for_employee(self, employee_id: str) -> Sequence[ShiftAssignment]:
        """Assignments in the repository's precedence order (first match wins)."""

        raise NotImplementedError
