from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from .base import PayrollCalculator
from ...adjustments.model import Adjustment
from ...attendance.service import days_present
from ...core.enums import AdjustmentType
from ...employees.model import Employee
from ...loans.model import Loan
from ...loans.schedule import repayment_due
from ..model import PayLine
from ..period import PeriodWindow

ZERO = Decimal("0")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: days present x wage + bonuses - deductions - loan repayment."""

    def pay_line(
        self,
        *,
        employee: Employee,
        department_name: str,
        window: PeriodWindow,
        days: Mapping[date, bool],
        adjustments: Sequence[Adjustment],
        loan: Optional[Loan],
    ) -> PayLine:
        present = days_present(days, window)
        wage = employee.effective_wage
        base_pay = wage * present

        bonuses = sum((a.amount for a in adjustments if a.adjustment_type == AdjustmentType.BONUS), ZERO)
        deductions = sum((a.amount for a in adjustments if a.adjustment_type == AdjustmentType.DEDUCTION), ZERO)
        total_adjustments = bonuses - deductions

        repayment = repayment_due(loan, window.end) if loan else ZERO

        return PayLine(
            employee=employee,
            department_name=department_name,
            days_present=present,
            wage=wage,
            base_pay=base_pay,
            adjustments=tuple(adjustments),
            total_adjustments=total_adjustments,
            loan_repayment=repayment,
            loan_id=loan.loan_id if loan and repayment > ZERO else None,
            total_pay=base_pay + total_adjustments - repayment,
        )
