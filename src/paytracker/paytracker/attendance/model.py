from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Tuple

from ..employees.model import Employee
from ..payroll.period import PeriodWindow


@dataclass(frozen=True)
class AttendanceRow:
    employee: Employee
    days: Dict[date, bool]
    days_present: int


@dataclass(frozen=True)
class AttendanceSheet:
    """Attendance grid of the open period: one row per employee, one column per markable day."""

    window: PeriodWindow
    rows: List[AttendanceRow] = field(default_factory=list)

    @property
    def dates(self) -> Tuple[date, ...]:
        return self.window.dates
