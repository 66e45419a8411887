from __future__ import annotations

from decimal import Decimal

import pytest

from src.paytracker.paytracker.core.constants import DEFAULT_PHOTO_URL
from src.paytracker.paytracker.core.enums import AuditAction
from src.paytracker.paytracker.core.exceptions import NotFoundError, ValidationError


def _add(services, admin, **overrides):
    fields = dict(
        first_name="Ibrahima",
        last_name="Fall",
        position="Chauffeur",
        department_id=None,
        phone="770000009",
        daily_wage="3500",
    )
    fields.update(overrides)
    return services.employees.add(admin, **fields)


def test_add_sets_current_wage_and_notifies(services, repos, admin, staff, fixed_now):
    employee_id = _add(services, admin, department_id=staff.logistics, now=fixed_now)

    employee = repos.employees.get_by_id(employee_id)
    assert employee.current_wage == Decimal("3500.00")
    assert employee.photo_url == DEFAULT_PHOTO_URL
    assert employee.registered_on == fixed_now.date()

    notification = list(repos.notifications.items.values())[-1]
    assert notification.title == "Nouvel Employé Ajouté"
    assert "Logistique" in notification.description
    assert notification.link == f"/employees/{employee_id}"
    assert repos.audit.entries[-1].action == AuditAction.EMPLOYEE_ADD


def test_phone_is_unique_per_company(services, admin, staff):
    with pytest.raises(ValidationError):
        _add(services, admin, phone="770000001")


@pytest.mark.parametrize("wage", ["0", "-10", "abc", ""])
def test_wage_must_be_positive(services, admin, company, wage):
    with pytest.raises(ValidationError):
        _add(services, admin, daily_wage=wage)


def test_unknown_department_is_refused(services, admin, company):
    with pytest.raises(ValidationError):
        _add(services, admin, department_id=42)


def test_update_keeps_current_wage_until_close(services, repos, admin, staff):
    services.employees.update(
        admin,
        staff.fatou,
        first_name="Fatou",
        last_name="Sow",
        position="Magasinière",
        department_id=staff.logistics,
        phone="770000003",
        daily_wage="5200",
    )

    employee = repos.employees.get_by_id(staff.fatou)
    assert employee.daily_wage == Decimal("5200.00")
    assert employee.current_wage == Decimal("4500")
    assert "période suivante" in repos.audit.entries[-1].details


def test_manager_cannot_be_moved_out_of_their_department(services, admin, staff):
    with pytest.raises(ValidationError):
        services.employees.transfer(admin, staff.awa, staff.logistics)


def test_transfer(services, repos, admin, staff):
    services.employees.transfer(admin, staff.moussa, staff.logistics)

    assert repos.employees.get_by_id(staff.moussa).department_id == staff.logistics


def test_delete_refused_for_manager(services, admin, staff):
    with pytest.raises(ValidationError):
        services.employees.delete(admin, staff.awa)


def test_delete_refused_with_active_loan(services, admin, staff):
    services.loans.grant(admin, staff.moussa, amount="1000", repayment_amount="500")

    with pytest.raises(ValidationError):
        services.employees.delete(admin, staff.moussa)


def test_delete(services, repos, admin, staff):
    services.employees.delete(admin, staff.moussa)

    with pytest.raises(NotFoundError):
        services.employees.get(admin.company_id, staff.moussa)
    assert repos.audit.entries[-1].action == AuditAction.EMPLOYEE_DELETE


def test_other_company_employee_is_not_found(services, staff):
    with pytest.raises(NotFoundError):
        services.employees.get(999, staff.awa)
