from __future__ import annotations

from datetime import date
from typing import Dict, Protocol, Sequence


class AttendanceRepository(Protocol):
    """Per-day presence flags. A missing row means absent."""

    def get_for_employees(self, employee_ids: Sequence[int], start: date, end: date) -> Dict[int, Dict[date, bool]]:
        raise NotImplementedError

    def set_day(self, employee_id: int, work_date: date, is_present: bool) -> None:
        raise NotImplementedError
