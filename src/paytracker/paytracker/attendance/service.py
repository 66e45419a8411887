from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..audit.service import AuditService
from ..companies.service import CompanyService
from ..core.enums import AuditAction, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..payroll.period import PeriodWindow, day_label
from ..users.model import SessionUser
from .model import AttendanceRow, AttendanceSheet
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def days_present(days: Mapping[date, bool], window: PeriodWindow) -> int:
    """Number of markable days of ``window`` flagged present."""
    return sum(1 for d in window.dates if days.get(d))


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        companies: CompanyService,
        audit: AuditService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._companies = companies
        self._audit = audit

    def sheet(self, company_id: int, *, department_id: Optional[int] = None) -> AttendanceSheet:
        company = self._companies.get(company_id)
        window = self._companies.current_period(company)
        employees = list(self._employees.list_for_company(company.company_id, department_id=department_id))
        by_employee = self._attendance.get_for_employees([e.employee_id for e in employees], window.start, window.end)

        rows = []
        for e in employees:
            days = {d: bool(by_employee.get(e.employee_id, {}).get(d)) for d in window.dates}
            rows.append(AttendanceRow(employee=e, days=days, days_present=days_present(days, window)))
        return AttendanceSheet(window=window, rows=rows)

    def employee_days(self, company_id: int, employee_id: int) -> AttendanceRow:
        company = self._companies.get(company_id)
        window = self._companies.current_period(company)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != company.company_id:
            raise NotFoundError("Employé introuvable")

        stored = self._attendance.get_for_employees([employee.employee_id], window.start, window.end)
        days = {d: bool(stored.get(employee.employee_id, {}).get(d)) for d in window.dates}
        return AttendanceRow(employee=employee, days=days, days_present=days_present(days, window))

    def mark(self, actor: SessionUser, employee_id: int, work_date: date, present: bool) -> None:
        """Set one day. Admins mark anybody in their company, managers only their own department."""
        if actor.role not in (Role.ADMIN, Role.MANAGER) or not actor.company_id:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != int(actor.company_id):
            raise NotFoundError("Employé introuvable")
        if actor.role == Role.MANAGER and employee.department_id != actor.department_id:
            raise AuthorizationError("Cet employé n'appartient pas à votre département")

        company = self._companies.get(actor.company_id)
        window = self._companies.current_period(company)
        if not window.contains(work_date):
            raise ValidationError("Ce jour ne fait pas partie de la période de paie en cours")

        self._attendance.set_day(employee.employee_id, work_date, bool(present))
        state = "présent" if present else "absent"
        logger.debug("Attendance %s %s -> %s by %s", employee.employee_id, work_date, state, actor.name)
        self._audit.record(
            company.company_id,
            AuditAction.ATTENDANCE_UPDATE,
            actor.name,
            f"{employee.full_name} marqué {state} le {day_label(work_date)}",
        )

