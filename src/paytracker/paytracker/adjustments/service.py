from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.permissions import require_company_role
from ..common.validators import parse_amount, require_non_empty
from ..core.enums import AdjustmentType, AuditAction
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..users.model import SessionUser
from .model import Adjustment
from .repository import AdjustmentRepository


class AdjustmentService:
    def __init__(self, adjustments: AdjustmentRepository, employees: EmployeeRepository, audit: AuditService):
        self._adjustments = adjustments
        self._employees = employees
        self._audit = audit

    def _employee(self, company_id: int, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != company_id:
            raise NotFoundError("Employé introuvable")
        return employee

    def list_for_employee(self, company_id: int, employee_id: int) -> List[Adjustment]:
        employee = self._employee(int(company_id), employee_id)
        return self._adjustments.list_for_employees([employee.employee_id]).get(employee.employee_id, [])

    def add(
        self,
        actor: SessionUser,
        employee_id: int,
        *,
        adjustment_type,
        amount,
        reason: str,
        now: Optional[datetime] = None,
    ) -> int:
        company_id = require_company_role(actor)
        employee = self._employee(company_id, employee_id)
        try:
            kind = AdjustmentType(adjustment_type)
        except ValueError:
            raise ValidationError("Type d'ajustement invalide")
        value = parse_amount(amount, "Montant")
        reason = require_non_empty(reason, "Motif")

        adjustment_id = self._adjustments.create(
            employee_id=employee.employee_id,
            adjustment_type=kind,
            amount=value,
            reason=reason,
            created_at=now or now_local(),
        )
        label = "Prime" if kind == AdjustmentType.BONUS else "Retenue"
        self._audit.record(
            company_id,
            AuditAction.ADJUSTMENT_ADD,
            actor.name,
            f"{label} de {value} pour {employee.full_name} : {reason}",
            now=now,
        )
        return adjustment_id

    def delete(self, actor: SessionUser, adjustment_id: int) -> None:
        company_id = require_company_role(actor)
        adjustment = self._adjustments.get_by_id(int(adjustment_id))
        if not adjustment:
            raise NotFoundError("Ajustement introuvable")
        employee = self._employee(company_id, adjustment.employee_id)

        if not self._adjustments.delete(adjustment.adjustment_id):
            raise ValidationError("Suppression de l'ajustement échouée")
        self._audit.record(
            company_id,
            AuditAction.ADJUSTMENT_DELETE,
            actor.name,
            f"Suppression d'un ajustement de {adjustment.amount} pour {employee.full_name}",
        )
