from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from ..adjustments.model import Adjustment
from ..employees.model import Employee


@dataclass(frozen=True)
class PayLine:
    """Pay of one employee for the open period."""

    employee: Employee
    department_name: str
    days_present: int
    wage: Decimal
    base_pay: Decimal
    adjustments: Tuple[Adjustment, ...]
    total_adjustments: Decimal
    loan_repayment: Decimal
    loan_id: Optional[int]
    total_pay: Decimal


@dataclass(frozen=True)
class DepartmentTotal:
    name: str
    total: Decimal
    employee_count: int

    def to_dict(self) -> dict:
        return {"name": self.name, "total": str(self.total), "employee_count": self.employee_count}


@dataclass(frozen=True)
class PayrollRecap:
    period_label: str
    period_start: date
    period_end: date
    lines: List[PayLine] = field(default_factory=list)
    departments: List[DepartmentTotal] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.total_pay for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class ArchivedPayroll:
    archive_id: int
    company_id: int
    period_label: str
    period_start: date
    period_end: date
    total_payroll: Decimal
    departments: Tuple[DepartmentTotal, ...]
    closed_at: datetime


@dataclass(frozen=True)
class PayStub:
    stub_id: int
    company_id: int
    archive_id: Optional[int]
    employee_id: int
    employee_name: str
    period_label: str
    pay_date: date
    days_present: int
    daily_wage_at_time: Decimal
    base_pay: Decimal
    adjustments: Tuple[dict, ...]
    total_adjustments: Decimal
    loan_repayment: Decimal
    total_pay: Decimal
