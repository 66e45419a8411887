from __future__ import annotations

from datetime import date, datetime

import pytest

from src.paytracker.paytracker.core.enums import AuditAction, RequestStatus, Role
from src.paytracker.paytracker.core.exceptions import AuthorizationError, ValidationError
from src.paytracker.paytracker.users.model import SessionUser

NOW = datetime(2024, 7, 24, 10, 0)
TUESDAY = date(2024, 7, 23)


def _employee(company, employee_id, name, department_id):
    return SessionUser(
        user_id=employee_id, name=name, role=Role.EMPLOYEE, company_id=company.company_id, department_id=department_id
    )


@pytest.fixture
def moussa(company, staff):
    return _employee(company, staff.moussa, "Moussa Ndiaye", staff.production)


@pytest.fixture
def fatou(company, staff):
    return _employee(company, staff.fatou, "Fatou Sow", staff.logistics)


def test_submit_for_absent_day(services, repos, moussa):
    justification_id = services.justifications.submit(moussa, work_date=TUESDAY, reason=" Malade ", now=NOW)

    item = repos.justifications.get_by_id(justification_id)
    assert item.status == RequestStatus.PENDING
    assert item.reason == "Malade"
    assert item.document_url is None
    assert [n.link for n in repos.notifications.items.values()] == ["/justifications"]
    assert [j.justification_id for j in services.justifications.list_mine(moussa)] == [justification_id]


def test_one_pending_justification_per_day(services, moussa):
    services.justifications.submit(moussa, work_date=TUESDAY, reason="Malade", now=NOW)

    with pytest.raises(ValidationError, match="attente"):
        services.justifications.submit(moussa, work_date=TUESDAY, reason="Encore", now=NOW)


def test_cannot_justify_a_present_day(services, admin, staff, moussa):
    services.attendance.mark(admin, staff.moussa, TUESDAY, True)

    with pytest.raises(ValidationError, match="présent"):
        services.justifications.submit(moussa, work_date=TUESDAY, reason="Malade", now=NOW)


@pytest.mark.parametrize("day", [date(2024, 7, 15), date(2024, 7, 28)])
def test_day_must_be_in_open_period(services, moussa, day):
    with pytest.raises(ValidationError):
        services.justifications.submit(moussa, work_date=day, reason="Malade", now=NOW)


def test_reason_required(services, moussa):
    with pytest.raises(ValidationError):
        services.justifications.submit(moussa, work_date=TUESDAY, reason="  ", now=NOW)


def test_manager_approval_marks_day_present(services, repos, manager, staff, moussa):
    justification_id = services.justifications.submit(moussa, work_date=TUESDAY, reason="Malade", now=NOW)

    services.justifications.review(manager, justification_id, approve=True, now=NOW)

    item = repos.justifications.get_by_id(justification_id)
    assert item.status == RequestStatus.APPROVED
    assert services.attendance.employee_days(manager.company_id, staff.moussa).days[TUESDAY] is True
    assert repos.audit.entries[-1].action == AuditAction.JUSTIFICATION_REVIEW

    with pytest.raises(ValidationError, match="traitée"):
        services.justifications.review(manager, justification_id, approve=False, now=NOW)


def test_rejection_leaves_day_absent(services, repos, admin, staff, fatou):
    justification_id = services.justifications.submit(fatou, work_date=TUESDAY, reason="Retard bus", now=NOW)

    services.justifications.review(admin, justification_id, approve=False, now=NOW)

    assert repos.justifications.get_by_id(justification_id).status == RequestStatus.REJECTED
    assert services.attendance.employee_days(admin.company_id, staff.fatou).days[TUESDAY] is False


def test_manager_reviews_only_their_department(services, manager, fatou):
    justification_id = services.justifications.submit(fatou, work_date=TUESDAY, reason="Malade", now=NOW)

    with pytest.raises(AuthorizationError):
        services.justifications.review(manager, justification_id, approve=True, now=NOW)


def test_pending_list_is_scoped_for_managers(services, admin, manager, moussa, fatou):
    services.justifications.submit(moussa, work_date=TUESDAY, reason="Malade", now=NOW)
    services.justifications.submit(fatou, work_date=TUESDAY, reason="Malade", now=NOW)

    assert len(services.justifications.list_pending(admin)) == 2
    assert [j.employee_name for j in services.justifications.list_pending(manager)] == ["Moussa Ndiaye"]


def test_only_employees_submit(services, manager):
    with pytest.raises(AuthorizationError):
        services.justifications.submit(manager, work_date=TUESDAY, reason="Malade", now=NOW)
