from __future__ import annotations

from datetime import datetime

import pytest

from src.paytracker.paytracker.core.enums import AdminRole, AuditAction, Role
from src.paytracker.paytracker.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.paytracker.paytracker.users.model import SessionUser

NOW = datetime(2024, 7, 24, 10, 0)


def test_admin_login_records_login_log(services, repos, company):
    user = services.auth.login_admin("0001", "admin", "admin123", now=NOW)

    assert user.role == Role.ADMIN
    assert user.is_superadmin
    assert user.company_name == "Demo SARL"
    assert [log.user_name for log in repos.audit.logins] == ["admin"]
    assert repos.audit.logins[0].created_at == NOW


@pytest.mark.parametrize("name, password", [("admin", "wrong"), ("nobody", "admin123")])
def test_admin_login_bad_credentials(services, repos, company, name, password):
    with pytest.raises(AuthenticationError):
        services.auth.login_admin("EPT-0001", name, password, now=NOW)
    assert repos.audit.logins == []


def test_suspended_company_only_admits_superadmin(services, admin, company):
    services.admins.add_admin(admin, name="adjoint", password="adjoint1")
    services.owner.toggle_suspension(company.company_id)

    with pytest.raises(AuthenticationError, match="suspendu"):
        services.auth.login_admin("0001", "adjoint", "adjoint1", now=NOW)
    assert services.auth.login_admin("0001", "admin", "admin123", now=NOW).is_superadmin


def test_manager_login_with_phone_pin(services, company, staff):
    user = services.auth.login_manager("0001", " 770000001 ", now=NOW)

    assert user.role == Role.MANAGER
    assert user.user_id == staff.awa
    assert user.department_id == staff.production
    assert user.department_name == "Production"


def test_non_manager_pin_is_refused(services, company, staff):
    with pytest.raises(AuthenticationError, match="responsable"):
        services.auth.login_manager("0001", "770000002", now=NOW)
    with pytest.raises(AuthenticationError):
        services.auth.login_manager("0001", "000", now=NOW)


def test_employee_login(services, repos, company, staff):
    user = services.auth.login_employee("0001", "770000003", now=NOW)

    assert user.role == Role.EMPLOYEE
    assert user.department_id == staff.logistics
    assert repos.audit.logins == []


def test_suspended_company_refuses_staff(services, company, staff):
    services.owner.toggle_suspension(company.company_id)

    with pytest.raises(AuthenticationError):
        services.auth.login_employee("0001", "770000003", now=NOW)
    with pytest.raises(AuthenticationError):
        services.auth.login_manager("0001", "770000001", now=NOW)


def test_owner_login(services):
    assert services.auth.login_owner("owner-test").role == Role.OWNER

    with pytest.raises(AuthenticationError):
        services.auth.login_owner("owner")


def test_add_admin_is_superadmin_only(services, repos, admin, company):
    admin_id = services.admins.add_admin(admin, name="adjoint", password="adjoint1")

    assert repos.admins.get_by_id(admin_id).role == AdminRole.ADJOINT
    assert repos.audit.entries[-1].action == AuditAction.ADMIN_ADD

    adjoint = SessionUser(
        user_id=admin_id, name="adjoint", role=Role.ADMIN, company_id=company.company_id, admin_role=AdminRole.ADJOINT
    )
    with pytest.raises(AuthorizationError):
        services.admins.add_admin(adjoint, name="autre", password="autre123")
    with pytest.raises(ValidationError):
        services.admins.add_admin(admin, name="adjoint", password="adjoint1")


def test_change_password(services, admin):
    with pytest.raises(ValidationError):
        services.admins.change_password(admin, current_password="bad", new_password="nouveau1")

    services.admins.change_password(admin, current_password="admin123", new_password="nouveau1")

    assert services.auth.login_admin("0001", "admin", "nouveau1", now=NOW)


def test_delete_admin_never_removes_superadmin(services, repos, admin):
    adjoint_id = services.admins.add_admin(admin, name="adjoint", password="adjoint1")

    with pytest.raises(ValidationError):
        services.admins.delete_admin(admin, admin.user_id)

    services.admins.delete_admin(admin, adjoint_id)
    assert [a.name for a in services.admins.list_admins(admin)] == ["admin"]
    assert repos.audit.entries[-1].action == AuditAction.ADMIN_DELETE


def test_manager_cannot_manage_admins(services, manager):
    with pytest.raises(AuthorizationError):
        services.admins.list_admins(manager)
