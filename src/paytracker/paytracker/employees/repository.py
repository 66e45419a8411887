from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_phone(self, company_id: int, phone: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_for_company(self, company_id: int, *, department_id: Optional[int] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        company_id: int,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        birth_date: Optional[date],
        address: str,
        phone: str,
        photo_url: str,
        daily_wage: Decimal,
        registered_on: date,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        birth_date: Optional[date],
        address: str,
        phone: str,
        photo_url: str,
        daily_wage: Decimal,
    ) -> None:
        raise NotImplementedError

    def set_department(self, employee_id: int, department_id: Optional[int]) -> None:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError

    def count_in_department(self, department_id: int) -> int:
        raise NotImplementedError
