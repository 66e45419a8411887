from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..audit.service import AuditService
from ..common.permissions import require_company_role
from ..common.validators import require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..users.model import SessionUser
from .model import Department
from .repository import DepartmentRepository


@dataclass(frozen=True)
class DepartmentOverview:
    department: Department
    manager: Optional[Employee]
    employee_count: int


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository, audit: AuditService):
        self._departments = departments
        self._employees = employees
        self._audit = audit

    def list(self, company_id: int) -> List[Department]:
        return list(self._departments.list_for_company(int(company_id)))

    def overview(self, company_id: int) -> List[DepartmentOverview]:
        employees = list(self._employees.list_for_company(int(company_id)))
        by_id = {e.employee_id: e for e in employees}
        out = []
        for d in self._departments.list_for_company(int(company_id)):
            out.append(
                DepartmentOverview(
                    department=d,
                    manager=by_id.get(d.manager_id) if d.manager_id else None,
                    employee_count=sum(1 for e in employees if e.department_id == d.department_id),
                )
            )
        return out

    def get(self, company_id: int, department_id: int) -> Department:
        department = self._departments.get_by_id(int(department_id))
        if not department or department.company_id != int(company_id):
            raise NotFoundError("Département introuvable")
        return department

    def _check_name(self, company_id: int, name: str, *, exclude_id: Optional[int] = None) -> str:
        name = require_non_empty(name, "Nom du département")
        for d in self._departments.list_for_company(company_id):
            if d.department_id != exclude_id and d.name.casefold() == name.casefold():
                raise ValidationError("Un département avec ce nom existe déjà.")
        return name

    def _check_manager(self, company_id: int, manager_id: Optional[int], *, department_id: Optional[int] = None):
        if not manager_id:
            return None
        manager = self._employees.get_by_id(int(manager_id))
        if not manager or manager.company_id != company_id:
            raise ValidationError("Responsable introuvable dans cette entreprise")
        managed = self._departments.get_by_manager(company_id, manager.employee_id)
        if managed and managed.department_id != department_id:
            raise ValidationError(f"{manager.full_name} est déjà responsable du département {managed.name}")
        return manager.employee_id

    def add(self, actor: SessionUser, *, name: str, manager_id: Optional[int] = None) -> int:
        company_id = require_company_role(actor)
        name = self._check_name(company_id, name)
        manager = self._check_manager(company_id, manager_id)

        department_id = self._departments.create(company_id=company_id, name=name, manager_id=manager)
        self._audit.record(company_id, AuditAction.DEPARTMENT_ADD, actor.name, f"Ajout du département {name}")
        return department_id

    def update(self, actor: SessionUser, department_id: int, *, name: str, manager_id: Optional[int] = None) -> None:
        company_id = require_company_role(actor)
        department = self.get(company_id, department_id)
        name = self._check_name(company_id, name, exclude_id=department.department_id)
        manager = self._check_manager(company_id, manager_id, department_id=department.department_id)

        self._departments.update(department.department_id, name=name, manager_id=manager)
        self._audit.record(
            company_id,
            AuditAction.DEPARTMENT_UPDATE,
            actor.name,
            f"Modification du département {department.name} -> {name}",
        )

    def delete(self, actor: SessionUser, department_id: int) -> None:
        company_id = require_company_role(actor)
        department = self.get(company_id, department_id)
        if self._employees.count_in_department(department.department_id) > 0:
            raise ValidationError(
                "Impossible de supprimer. Veuillez d'abord réaffecter les employés de ce département."
            )
        if not self._departments.delete(department.department_id):
            raise ValidationError("Suppression du département échouée")
        self._audit.record(company_id, AuditAction.DEPARTMENT_DELETE, actor.name, f"Suppression du département {department.name}")
