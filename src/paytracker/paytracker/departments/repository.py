from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_manager(self, company_id: int, manager_id: int) -> Optional[Department]:
        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, *, company_id: int, name: str, manager_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, department_id: int, *, name: str, manager_id: Optional[int]) -> None:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError
