from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import LoanStatus
from .model import Loan


class LoanRepository(Protocol):
    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        raise NotImplementedError

    def get_active_for_employee(self, employee_id: int) -> Optional[Loan]:
        raise NotImplementedError

    def list_for_company(self, company_id: int, *, status: Optional[LoanStatus] = None) -> Sequence[Loan]:
        raise NotImplementedError

    def create(
        self,
        *,
        company_id: int,
        employee_id: int,
        amount: Decimal,
        repayment_amount: Decimal,
        start_date: date,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def set_status(self, loan_id: int, status: LoanStatus) -> None:
        raise NotImplementedError
