from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class AbsenceJustification:
    justification_id: int
    company_id: int
    employee_id: int
    work_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    document_url: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    employee_name: str = ""
    department_id: Optional[int] = None
