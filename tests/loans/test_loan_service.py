from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.paytracker.paytracker.core.enums import AuditAction, LoanStatus
from src.paytracker.paytracker.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_grant_creates_active_loan_with_full_balance(services, repos, admin, staff, fixed_now):
    loan_id = services.loans.grant(
        admin, staff.moussa, amount="10 000", repayment_amount="2000", start_date=date(2024, 7, 22), now=fixed_now
    )

    loan = repos.loans.get_by_id(loan_id)
    assert loan.status == LoanStatus.ACTIVE
    assert loan.balance == Decimal("10000.00")
    assert repos.audit.entries[-1].action == AuditAction.LOAN_ADD


def test_grant_defaults_start_to_today(services, repos, admin, staff, fixed_now):
    loan_id = services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500", now=fixed_now)

    assert repos.loans.get_by_id(loan_id).start_date == fixed_now.date()


def test_repayment_cannot_exceed_amount(services, admin, staff):
    with pytest.raises(ValidationError):
        services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="1500")


def test_one_active_loan_per_employee(services, admin, staff):
    services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500")

    with pytest.raises(ValidationError):
        services.loans.grant(admin, staff.moussa, amount="2000", repayment_amount="500")


def test_grant_for_unknown_employee(services, admin, staff):
    with pytest.raises(NotFoundError):
        services.loans.grant(admin, 999, amount="1000", repayment_amount="500")


def test_manager_cannot_grant(services, manager, staff):
    with pytest.raises(AuthorizationError):
        services.loans.grant(manager, staff.moussa, amount="1000", repayment_amount="500")


def test_pause_resume_and_cancel(services, repos, admin, staff):
    loan_id = services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500")

    services.loans.set_status(admin, loan_id, "paused")
    assert repos.loans.get_by_id(loan_id).status == LoanStatus.PAUSED

    services.loans.set_status(admin, loan_id, "active")
    assert repos.loans.get_by_id(loan_id).status == LoanStatus.ACTIVE

    services.loans.set_status(admin, loan_id, "cancelled")
    assert repos.loans.get_by_id(loan_id).status == LoanStatus.CANCELLED

    with pytest.raises(ValidationError):
        services.loans.set_status(admin, loan_id, "active")


def test_repaid_is_not_a_manual_transition(services, admin, staff):
    loan_id = services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500")

    with pytest.raises(ValidationError):
        services.loans.set_status(admin, loan_id, "repaid")


def test_resume_refused_when_another_loan_is_active(services, admin, staff):
    first = services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500")
    services.loans.set_status(admin, first, "paused")
    services.loans.grant(admin, staff.moussa, amount="3000", repayment_amount="1000")

    with pytest.raises(ValidationError):
        services.loans.set_status(admin, first, "active")


def test_list_joins_employee_and_remaining_periods(services, admin, staff):
    services.loans.grant(admin, staff.moussa, amount="2500", repayment_amount="1000")

    views = services.loans.list(admin.company_id)

    assert len(views) == 1
    assert views[0].employee.first_name == "Moussa"
    assert views[0].remaining_periods == 3
    assert services.loans.list(admin.company_id, status=LoanStatus.PAUSED) == []


def test_sub_cent_repayment_is_refused(services, repos, admin, staff):
    with pytest.raises(ValidationError):
        services.loans.grant(admin, staff.awa, amount="100", repayment_amount="0.004")
    assert repos.loans.list_for_company(admin.company_id) == []


def test_list_shows_balance_projected_from_elapsed_periods(services, admin, staff, fixed_now):
    active = services.loans.grant(
        admin, staff.moussa, amount="10000", repayment_amount="2000", start_date=date(2024, 7, 22), now=fixed_now
    )
    paused = services.loans.grant(
        admin, staff.fatou, amount="3000", repayment_amount="1000", start_date=date(2024, 7, 1), now=fixed_now
    )
    services.loans.set_status(admin, paused, "paused")

    views = {v.loan.loan_id: v for v in services.loans.list(admin.company_id, as_of=date(2024, 8, 12))}

    assert views[active].projected_balance == Decimal("4000")
    assert views[active].remaining_periods == 5
    assert views[active].employee.first_name == "Moussa"
    assert views[paused].projected_balance == Decimal("3000")


def test_projection_never_goes_below_zero(services, admin, staff, fixed_now):
    services.loans.grant(
        admin, staff.moussa, amount="1000", repayment_amount="500", start_date=date(2024, 1, 1), now=fixed_now
    )

    (view,) = services.loans.list(admin.company_id, as_of=date(2024, 7, 24))
    assert view.projected_balance == Decimal("0")
