from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmployeeContext:
    """Employee attributes the evaluators filter and price on."""

    employee_id: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    employment_type: Optional[str] = None
    base_salary: Optional[float] = None
