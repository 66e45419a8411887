from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import AbsenceJustification


class JustificationRepository(Protocol):
    def get_by_id(self, justification_id: int) -> Optional[AbsenceJustification]:
        raise NotImplementedError

    def find_pending(self, employee_id: int, work_date: date) -> Optional[AbsenceJustification]:
        raise NotImplementedError

    def list_for_company(
        self,
        company_id: int,
        *,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AbsenceJustification]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int = 100) -> Sequence[AbsenceJustification]:
        raise NotImplementedError

    def create(
        self,
        *,
        company_id: int,
        employee_id: int,
        work_date: date,
        reason: str,
        document_url: Optional[str],
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def decide(
        self, justification_id: int, *, status: RequestStatus, reviewed_by: str, reviewed_at: datetime
    ) -> bool:
        """Only pending rows are decided."""
        raise NotImplementedError
