from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from ..audit.service import AuditService
from ..common.datetime_utils import now_local
from ..common.permissions import require_company_role
from ..common.validators import parse_amount
from ..companies.service import CompanyService
from ..core.enums import AuditAction, LoanStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..users.model import SessionUser
from .model import Loan
from .repository import LoanRepository
from .schedule import projected_balance, remaining_periods

logger = logging.getLogger(__name__)

# Allowed manual status changes. Repaid is only reached by closing periods.
_TRANSITIONS = {
    LoanStatus.ACTIVE: {LoanStatus.PAUSED, LoanStatus.CANCELLED},
    LoanStatus.PAUSED: {LoanStatus.ACTIVE, LoanStatus.CANCELLED},
    LoanStatus.REPAID: set(),
    LoanStatus.CANCELLED: set(),
}

STATUS_LABELS = {
    LoanStatus.ACTIVE: "En cours",
    LoanStatus.PAUSED: "En pause",
    LoanStatus.REPAID: "Remboursée",
    LoanStatus.CANCELLED: "Annulée",
}


@dataclass(frozen=True)
class LoanView:
    loan: Loan
    employee: Optional[Employee]
    remaining_periods: int
    projected_balance: Decimal


class LoanService:
    def __init__(
        self,
        loans: LoanRepository,
        employees: EmployeeRepository,
        companies: CompanyService,
        audit: AuditService,
    ):
        self._loans = loans
        self._employees = employees
        self._companies = companies
        self._audit = audit

    def list(
        self, company_id: int, *, status: Optional[LoanStatus] = None, as_of: Optional[date] = None
    ) -> List[LoanView]:
        """Loans with the balance expected from elapsed periods as of ``as_of`` (today by default)."""
        company = self._companies.get(company_id)
        as_of = as_of or now_local().date()
        employees = {e.employee_id: e for e in self._employees.list_for_company(company.company_id)}
        return [
            LoanView(
                loan=loan,
                employee=employees.get(loan.employee_id),
                remaining_periods=remaining_periods(loan),
                projected_balance=projected_balance(loan, company.pay_period, as_of),
            )
            for loan in self._loans.list_for_company(company.company_id, status=status)
        ]

    def grant(
        self,
        actor: SessionUser,
        employee_id: int,
        *,
        amount,
        repayment_amount,
        start_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> int:
        company_id = require_company_role(actor)
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or employee.company_id != company_id:
            raise NotFoundError("Employé introuvable")

        total = parse_amount(amount, "Montant de l'avance")
        per_period = parse_amount(repayment_amount, "Montant du remboursement")
        if per_period > total:
            raise ValidationError("Le remboursement par période ne peut pas dépasser le montant de l'avance")
        if self._loans.get_active_for_employee(employee.employee_id):
            raise ValidationError("Cet employé a déjà une avance en cours.")

        now = now or now_local()
        loan_id = self._loans.create(
            company_id=company_id,
            employee_id=employee.employee_id,
            amount=total,
            repayment_amount=per_period,
            start_date=start_date or now.date(),
            created_at=now,
        )
        self._audit.record(
            company_id,
            AuditAction.LOAN_ADD,
            actor.name,
            f"Avance de {total} accordée à {employee.full_name} ({per_period} par période)",
            now=now,
        )
        return loan_id

    def set_status(self, actor: SessionUser, loan_id: int, status) -> None:
        company_id = require_company_role(actor)
        loan = self._loans.get_by_id(int(loan_id))
        if not loan or loan.company_id != company_id:
            raise NotFoundError("Avance introuvable")
        try:
            target = LoanStatus(status)
        except ValueError:
            raise ValidationError("Statut invalide")

        if target == loan.status:
            return
        if target not in _TRANSITIONS[loan.status]:
            raise ValidationError(
                f"Impossible de passer une avance « {STATUS_LABELS[loan.status]} » à « {STATUS_LABELS[target]} »"
            )
        if target == LoanStatus.ACTIVE:
            other = self._loans.get_active_for_employee(loan.employee_id)
            if other and other.loan_id != loan.loan_id:
                raise ValidationError("Cet employé a déjà une avance en cours.")

        self._loans.set_status(loan.loan_id, target)
        logger.info("Loan %s: %s -> %s", loan.loan_id, loan.status.value, target.value)
        self._audit.record(
            company_id,
            AuditAction.LOAN_UPDATE_STATUS,
            actor.name,
            f"Avance #{loan.loan_id} : {STATUS_LABELS[loan.status]} -> {STATUS_LABELS[target]}",
        )
