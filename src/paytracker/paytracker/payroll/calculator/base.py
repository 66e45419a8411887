from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Mapping, Optional, Sequence

from ...adjustments.model import Adjustment
from ...employees.model import Employee
from ...loans.model import Loan
from ..model import PayLine
from ..period import PeriodWindow


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
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
        raise NotImplementedError
