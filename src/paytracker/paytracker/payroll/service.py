from __future__ import annotations

import io
import logging
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from ..adjustments.repository import AdjustmentRepository
from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditService
from ..common.currency import format_currency
from ..common.datetime_utils import now_local
from ..common.permissions import require_company_role
from ..companies.service import CompanyService
from ..core.enums import AuditAction, LoanStatus, NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from ..loans.repository import LoanRepository
from ..notifications.service import NotificationService
from ..users.model import SessionUser
from . import export
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import ArchivedPayroll, DepartmentTotal, PayLine, PayrollRecap, PayStub
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

NO_DEPARTMENT = "Sans département"
ZERO = Decimal("0")


class PayrollService:
    """Recap of the open period, period closing, archives and pay stubs."""

    def __init__(
        self,
        payroll: PayrollRepository,
        *,
        companies: CompanyService,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        attendance: AttendanceRepository,
        adjustments: AdjustmentRepository,
        loans: LoanRepository,
        notifications: NotificationService,
        audit: AuditService,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._companies = companies
        self._employees = employees
        self._departments = departments
        self._attendance = attendance
        self._adjustments = adjustments
        self._loans = loans
        self._notifications = notifications
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()

    def build_recap(self, company_id: int) -> PayrollRecap:
        company = self._companies.get(company_id)
        window = self._companies.current_period(company)

        employees = list(self._employees.list_for_company(company.company_id))
        ids = [e.employee_id for e in employees]
        department_names = {d.department_id: d.name for d in self._departments.list_for_company(company.company_id)}
        presence = self._attendance.get_for_employees(ids, window.start, window.end)
        adjustments = self._adjustments.list_for_employees(ids)
        loans = {
            loan.employee_id: loan
            for loan in self._loans.list_for_company(company.company_id, status=LoanStatus.ACTIVE)
        }

        lines: List[PayLine] = []
        for e in employees:
            lines.append(
                self._calculator.pay_line(
                    employee=e,
                    department_name=department_names.get(e.department_id, NO_DEPARTMENT),
                    window=window,
                    days=presence.get(e.employee_id, {}),
                    adjustments=adjustments.get(e.employee_id, []),
                    loan=loans.get(e.employee_id),
                )
            )

        return PayrollRecap(
            period_label=window.label,
            period_start=window.start,
            period_end=window.end,
            lines=lines,
            departments=self._department_totals(lines),
        )

    @staticmethod
    def _department_totals(lines: List[PayLine]) -> List[DepartmentTotal]:
        grouped: Dict[str, List[PayLine]] = OrderedDict()
        for line in sorted(lines, key=lambda x: x.department_name.casefold()):
            grouped.setdefault(line.department_name, []).append(line)
        return [
            DepartmentTotal(
                name=name,
                total=sum((line.total_pay for line in group), ZERO),
                employee_count=len(group),
            )
            for name, group in grouped.items()
        ]

    def close_period(self, actor: SessionUser, *, now: Optional[datetime] = None) -> int:
        """Archive the open period and start the next one. Returns the archive id."""
        company_id = require_company_role(actor)
        company = self._companies.get(company_id)
        window = self._companies.current_period(company)
        recap = self.build_recap(company_id)
        now = now or now_local()

        if not recap.lines:
            raise ValidationError("Aucun employé : rien à archiver pour cette période.")

        stubs = [
            PayStub(
                stub_id=0,
                company_id=company_id,
                archive_id=None,
                employee_id=line.employee.employee_id,
                employee_name=line.employee.full_name,
                period_label=recap.period_label,
                pay_date=now.date(),
                days_present=line.days_present,
                daily_wage_at_time=line.wage,
                base_pay=line.base_pay,
                adjustments=tuple(a.to_dict() for a in line.adjustments),
                total_adjustments=line.total_adjustments,
                loan_repayment=line.loan_repayment,
                total_pay=line.total_pay,
            )
            for line in recap.lines
        ]
        repayments = [(line.loan_id, line.loan_repayment) for line in recap.lines if line.loan_id]

        closed = self._payroll.close_period(
            company_id=company_id,
            period_label=recap.period_label,
            period_start=window.start,
            period_end=window.end,
            next_period_start=window.next_start(),
            total_payroll=recap.total,
            departments=recap.departments,
            stubs=stubs,
            loan_repayments=repayments,
            closed_at=now,
        )
        logger.info(
            "Closed %s for company %s: archive=%s total=%s",
            recap.period_label,
            company.identifier,
            closed.archive_id,
            recap.total,
        )

        names = {line.loan_id: line.employee.full_name for line in recap.lines if line.loan_id}
        for loan_id in closed.repaid_loan_ids:
            self._notifications.notify(
                company_id,
                "Avance Remboursée",
                f"L'avance de {names.get(loan_id, 'un employé')} a été entièrement remboursée.",
                link="/loans",
                notification_type=NotificationType.SUCCESS,
                now=now,
            )

        self._audit.record(
            company_id,
            AuditAction.PAYROLL_ARCHIVE,
            actor.name,
            f"Clôture de la période « {recap.period_label} » : {format_currency(recap.total, company.currency)}",
            now=now,
        )
        return closed.archive_id

    def list_archives(self, company_id: int) -> List[ArchivedPayroll]:
        return list(self._payroll.list_archives(int(company_id)))

    def get_archive(self, company_id: int, archive_id: int) -> ArchivedPayroll:
        archive = self._payroll.get_archive(int(archive_id))
        if not archive or archive.company_id != int(company_id):
            raise NotFoundError("Archive introuvable")
        return archive

    def delete_archive(self, actor: SessionUser, archive_id: int) -> None:
        company_id = require_company_role(actor)
        archive = self.get_archive(company_id, archive_id)
        if not self._payroll.delete_archive(archive.archive_id):
            raise ValidationError("Suppression de l'archive échouée")
        logger.info("Deleted archive %s (%s)", archive.archive_id, archive.period_label)

    def archive_stubs(self, company_id: int, archive_id: int) -> List[PayStub]:
        archive = self.get_archive(company_id, archive_id)
        return self._payroll.list_stubs_for_archive(archive.archive_id)

    def pay_stubs(self, company_id: int, employee_id: int, *, limit: int = 52) -> List[PayStub]:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != int(company_id):
            raise NotFoundError("Employé introuvable")
        return self._payroll.list_stubs_for_employee(employee.employee_id, limit=limit)

    def recap_csv(self, company_id: int) -> bytes:
        return export.to_csv_bytes(export.recap_rows(self.build_recap(company_id)))

    def recap_excel(self, company_id: int) -> io.BytesIO:
        return export.recap_to_excel(self.build_recap(company_id))

    def archive_excel(self, company_id: int, archive_id: int) -> io.BytesIO:
        archive = self.get_archive(company_id, archive_id)
        return export.archive_to_excel(archive, self._payroll.list_stubs_for_archive(archive.archive_id))
