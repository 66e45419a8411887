from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import LoanStatus


@dataclass(frozen=True)
class Loan:
    """Salary advance, repaid by a fixed amount withheld from each closed period."""

    loan_id: int
    company_id: int
    employee_id: int
    amount: Decimal
    repayment_amount: Decimal
    balance: Decimal
    start_date: date
    status: LoanStatus = LoanStatus.ACTIVE
    created_at: Optional[datetime] = None
