from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.permissions import require_company_role
from ..common.validators import parse_amount, require_non_empty
from ..core.constants import DEFAULT_PHOTO_URL
from ..core.enums import AuditAction, NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from ..departments.model import Department
from ..departments.repository import DepartmentRepository
from ..loans.repository import LoanRepository
from ..notifications.service import NotificationService
from ..users.model import SessionUser
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees of a company (admin)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        loans: LoanRepository,
        notifications: NotificationService,
        audit: AuditService,
    ):
        self._employees = employees
        self._departments = departments
        self._loans = loans
        self._notifications = notifications
        self._audit = audit

    def list(self, company_id: int, *, department_id: Optional[int] = None) -> List[Employee]:
        return list(self._employees.list_for_company(int(company_id), department_id=department_id))

    def get(self, company_id: int, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != int(company_id):
            raise NotFoundError("Employé introuvable")
        return employee

    def _department(self, company_id: int, department_id: Optional[int]) -> Optional[Department]:
        if not department_id:
            return None
        department = self._departments.get_by_id(int(department_id))
        if not department or department.company_id != company_id:
            raise ValidationError("Département introuvable")
        return department

    def _check_phone(self, company_id: int, phone: str, *, exclude_id: Optional[int] = None) -> str:
        phone = require_non_empty(phone, "Téléphone")
        other = self._employees.get_by_phone(company_id, phone)
        if other and other.employee_id != exclude_id:
            raise ValidationError("Un employé avec ce numéro de téléphone existe déjà.")
        return phone

    def add(
        self,
        actor: SessionUser,
        *,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        phone: str,
        daily_wage,
        birth_date: Optional[date] = None,
        address: str = "",
        photo_url: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        company_id = require_company_role(actor)
        first_name = require_non_empty(first_name, "Prénom")
        last_name = require_non_empty(last_name, "Nom")
        wage = parse_amount(daily_wage, "Salaire journalier")
        department = self._department(company_id, department_id)
        phone = self._check_phone(company_id, phone)
        now = now or now_local()

        employee_id = self._employees.create(
            company_id=company_id,
            first_name=first_name,
            last_name=last_name,
            position=(position or "").strip(),
            department_id=department.department_id if department else None,
            birth_date=birth_date,
            address=(address or "").strip(),
            phone=phone,
            photo_url=(photo_url or "").strip() or DEFAULT_PHOTO_URL,
            daily_wage=wage,
            registered_on=now.date(),
        )

        full_name = f"{first_name} {last_name}"
        where = f" au département {department.name}" if department else ""
        self._notifications.notify(
            company_id,
            "Nouvel Employé Ajouté",
            f"{full_name} a été ajouté{where}.",
            link=f"/employees/{employee_id}",
            notification_type=NotificationType.SUCCESS,
            now=now,
        )
        self._audit.record(company_id, AuditAction.EMPLOYEE_ADD, actor.name, f"Ajout de l'employé {full_name}", now=now)
        return employee_id

    def update(
        self,
        actor: SessionUser,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        phone: str,
        daily_wage,
        birth_date: Optional[date] = None,
        address: str = "",
        photo_url: str = "",
    ) -> None:
        """Edit an employee. A new daily wage only applies from the next pay period."""
        company_id = require_company_role(actor)
        employee = self.get(company_id, employee_id)
        first_name = require_non_empty(first_name, "Prénom")
        last_name = require_non_empty(last_name, "Nom")
        wage = parse_amount(daily_wage, "Salaire journalier")
        department = self._department(company_id, department_id)
        phone = self._check_phone(company_id, phone, exclude_id=employee.employee_id)
        new_department_id = department.department_id if department else None
        if new_department_id != employee.department_id:
            managed = self._departments.get_by_manager(company_id, employee.employee_id)
            if managed and managed.department_id != new_department_id:
                raise ValidationError(
                    "Cet employé est manager d'un département. Veuillez d'abord assigner un nouveau manager."
                )

        self._employees.update(
            employee.employee_id,
            first_name=first_name,
            last_name=last_name,
            position=(position or "").strip(),
            department_id=new_department_id,
            birth_date=birth_date,
            address=(address or "").strip(),
            phone=phone,
            photo_url=(photo_url or "").strip() or employee.photo_url or DEFAULT_PHOTO_URL,
            daily_wage=wage,
        )

        details = f"Modification de l'employé {first_name} {last_name}"
        if wage != employee.daily_wage:
            details += f" (salaire journalier {employee.daily_wage} -> {wage}, période suivante)"
        self._audit.record(company_id, AuditAction.EMPLOYEE_UPDATE, actor.name, details)

    def transfer(self, actor: SessionUser, employee_id: int, department_id: Optional[int]) -> None:
        company_id = require_company_role(actor)
        employee = self.get(company_id, employee_id)
        department = self._department(company_id, department_id)
        new_id = department.department_id if department else None
        if new_id == employee.department_id:
            return

        managed = self._departments.get_by_manager(company_id, employee.employee_id)
        if managed and managed.department_id != new_id:
            raise ValidationError(
                "Cet employé est manager d'un département. Veuillez d'abord assigner un nouveau manager."
            )

        self._employees.set_department(employee.employee_id, new_id)
        self._audit.record(
            company_id,
            AuditAction.EMPLOYEE_UPDATE,
            actor.name,
            f"Transfert de {employee.full_name} vers {department.name if department else 'aucun département'}",
        )

    def delete(self, actor: SessionUser, employee_id: int) -> None:
        company_id = require_company_role(actor)
        employee = self.get(company_id, employee_id)

        if self._departments.get_by_manager(company_id, employee.employee_id):
            raise ValidationError(
                "Cet employé est manager d'un département. Veuillez d'abord assigner un nouveau manager."
            )
        if self._loans.get_active_for_employee(employee.employee_id):
            raise ValidationError(
                "Cet employé a une avance en cours. Veuillez d'abord régler la situation de l'avance."
            )

        if not self._employees.delete(employee.employee_id):
            raise ValidationError("Suppression de l'employé échouée")
        logger.info("Deleted employee %s of company %s", employee.employee_id, company_id)
        self._audit.record(company_id, AuditAction.EMPLOYEE_DELETE, actor.name, f"Suppression de l'employé {employee.full_name}")
