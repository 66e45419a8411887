from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Protocol, Sequence, Tuple

from .model import ArchivedPayroll, DepartmentTotal, PayStub


@dataclass(frozen=True)
class ClosedPeriod:
    archive_id: int
    repaid_loan_ids: Tuple[int, ...] = ()


class PayrollRepository(Protocol):
    def close_period(
        self,
        *,
        company_id: int,
        period_label: str,
        period_start: date,
        period_end: date,
        next_period_start: date,
        total_payroll: Decimal,
        departments: Sequence[DepartmentTotal],
        stubs: Sequence[PayStub],
        loan_repayments: Sequence[Tuple[int, Decimal]],
        closed_at: datetime,
    ) -> ClosedPeriod:
        """Archive, pay stubs, loan balances, wage/adjustment reset and period move: all or nothing."""
        raise NotImplementedError

    def list_archives(self, company_id: int) -> Sequence[ArchivedPayroll]:
        raise NotImplementedError

    def get_archive(self, archive_id: int) -> Optional[ArchivedPayroll]:
        raise NotImplementedError

    def delete_archive(self, archive_id: int) -> bool:
        raise NotImplementedError

    def list_stubs_for_employee(self, employee_id: int, *, limit: int) -> List[PayStub]:
        raise NotImplementedError

    def list_stubs_for_archive(self, archive_id: int) -> List[PayStub]:
        raise NotImplementedError
