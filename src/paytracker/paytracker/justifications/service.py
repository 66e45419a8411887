from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..companies.service import CompanyService
from ..core.enums import AuditAction, NotificationType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from ..payroll.period import day_label
from ..users.model import SessionUser
from .model import AbsenceJustification
from .repository import JustificationRepository

logger = logging.getLogger(__name__)


class JustificationService:
    """Absence justifications: employees submit, admins or their manager review."""

    def __init__(
        self,
        justifications: JustificationRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        companies: CompanyService,
        notifications: NotificationService,
        audit: AuditService,
    ):
        self._justifications = justifications
        self._employees = employees
        self._attendance = attendance
        self._companies = companies
        self._notifications = notifications
        self._audit = audit

    def submit(
        self,
        actor: SessionUser,
        *,
        work_date: date,
        reason: str,
        document_url: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        if actor.role != Role.EMPLOYEE or not actor.company_id:
            raise AuthorizationError("Seul un employé peut soumettre une justification")

        employee = self._employees.get_by_id(actor.user_id)
        if not employee or employee.company_id != int(actor.company_id):
            raise NotFoundError("Employé introuvable")
        reason = require_non_empty(reason, "Motif")

        company = self._companies.get(employee.company_id)
        window = self._companies.current_period(company)
        if not window.contains(work_date):
            raise ValidationError("Ce jour ne fait pas partie de la période de paie en cours")

        stored = self._attendance.get_for_employees([employee.employee_id], work_date, work_date)
        if stored.get(employee.employee_id, {}).get(work_date):
            raise ValidationError("Vous êtes déjà marqué présent ce jour-là")
        if self._justifications.find_pending(employee.employee_id, work_date):
            raise ValidationError("Une justification est déjà en attente pour ce jour")

        now = now or now_local()
        justification_id = self._justifications.create(
            company_id=company.company_id,
            employee_id=employee.employee_id,
            work_date=work_date,
            reason=reason,
            document_url=(document_url or "").strip() or None,
            created_at=now,
        )
        self._notifications.notify(
            company.company_id,
            "Nouvelle Justification d'Absence",
            f"{employee.full_name} a soumis une justification pour le {day_label(work_date)}.",
            link="/justifications",
            notification_type=NotificationType.INFO,
            now=now,
        )
        return justification_id

    def review(
        self,
        actor: SessionUser,
        justification_id: int,
        *,
        approve: bool,
        now: Optional[datetime] = None,
    ) -> None:
        if actor.role not in (Role.ADMIN, Role.MANAGER) or not actor.company_id:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")

        item = self._justifications.get_by_id(int(justification_id))
        if not item or item.company_id != int(actor.company_id):
            raise NotFoundError("Justification introuvable")
        if actor.role == Role.MANAGER and item.department_id != actor.department_id:
            raise AuthorizationError("Cet employé n'appartient pas à votre département")
        if item.status != RequestStatus.PENDING:
            raise ValidationError("Cette justification a déjà été traitée")

        status = RequestStatus.APPROVED if approve else RequestStatus.REJECTED
        if approve:
            company = self._companies.get(item.company_id)
            if not self._companies.current_period(company).contains(item.work_date):
                raise ValidationError("La période de cette absence est déjà clôturée")

        now = now or now_local()
        if not self._justifications.decide(item.justification_id, status=status, reviewed_by=actor.name, reviewed_at=now):
            raise ValidationError("Cette justification a déjà été traitée")
        if approve:
            self._attendance.set_day(item.employee_id, item.work_date, True)

        verb = "approuvée" if approve else "rejetée"
        self._notifications.notify(
            item.company_id,
            f"Justification {'Approuvée' if approve else 'Rejetée'}",
            f"La justification de {item.employee_name} a été {verb} par {actor.name}.",
            link=f"/employees/{item.employee_id}",
            notification_type=NotificationType.SUCCESS if approve else NotificationType.WARNING,
            now=now,
        )
        self._audit.record(
            item.company_id,
            AuditAction.JUSTIFICATION_REVIEW,
            actor.name,
            f"Justification de {item.employee_name} ({day_label(item.work_date)}) {verb}",
            now=now,
        )
        logger.info("Justification %s %s by %s", item.justification_id, status.value, actor.name)

    def list_pending(self, actor: SessionUser) -> List[AbsenceJustification]:
        if actor.role not in (Role.ADMIN, Role.MANAGER) or not actor.company_id:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")
        department_id = actor.department_id if actor.role == Role.MANAGER else None
        return list(
            self._justifications.list_for_company(
                int(actor.company_id), status=RequestStatus.PENDING, department_id=department_id
            )
        )

    def list_mine(self, actor: SessionUser) -> List[AbsenceJustification]:
        if actor.role != Role.EMPLOYEE:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")
        return list(self._justifications.list_for_employee(actor.user_id))
