from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``current_wage`` is the daily wage used for the open pay period; ``daily_wage``
    becomes the current wage when the period is closed.
    """

    employee_id: int
    company_id: int
    first_name: str
    last_name: str
    position: str
    department_id: Optional[int]
    phone: str
    daily_wage: Decimal
    current_wage: Decimal
    registered_on: date
    birth_date: Optional[date] = None
    address: str = ""
    photo_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def effective_wage(self) -> Decimal:
        return self.current_wage or self.daily_wage
