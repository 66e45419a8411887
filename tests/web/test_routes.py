from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.paytracker.paytracker.companies.model import SiteSettings
from src.paytracker.paytracker.core.enums import AdminRole, Role
from src.paytracker.paytracker.core.exceptions import AuthenticationError, ValidationError
from src.paytracker.paytracker.main import create_app
from src.paytracker.paytracker.users.model import SessionUser

ADMIN = SessionUser(
    user_id=1, name="admin", role=Role.ADMIN, company_id=1, company_name="Demo SARL", admin_role=AdminRole.SUPERADMIN
)
MANAGER = SessionUser(
    user_id=1, name="Awa Diop", role=Role.MANAGER, company_id=1, department_id=1, department_name="Production"
)
EMPLOYEE = SessionUser(user_id=2, name="Moussa Ndiaye", role=Role.EMPLOYEE, company_id=1, department_id=1)


@pytest.fixture
def container():
    c = MagicMock()
    c.owner_service.get_site_settings.return_value = SiteSettings()
    c.notification_service.unread_count.return_value = 0
    return c


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


def _login(client, user):
    with client.session_transaction() as sess:
        sess.update(user.to_session())


def test_login_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Administrateur".encode() in response.data


def test_protected_page_redirects_to_login(client):
    response = client.get("/dashboard")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")


def test_wrong_role_gets_forbidden_page(client):
    _login(client, EMPLOYEE)

    assert client.get("/dashboard").status_code == 403


def test_admin_login_starts_session(client, container):
    container.auth_service.login_admin.return_value = ADMIN

    response = client.post("/", data={"identifier": "0001", "name": "admin", "password": "admin123"})

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/dashboard")
    container.auth_service.login_admin.assert_called_once_with("0001", "admin", "admin123")
    with client.session_transaction() as sess:
        assert sess["role"] == "admin"
        assert sess["admin_role"] == "superadmin"


def test_failed_login_shows_form_again(client, container):
    container.auth_service.login_admin.side_effect = AuthenticationError("Nom ou mot de passe incorrect.")

    response = client.post("/", data={"identifier": "0001", "name": "admin", "password": "x"})

    assert response.status_code == 200
    with client.session_transaction() as sess:
        assert "role" not in sess


def test_chat_send_json(client, container):
    container.chat_service.send.return_value = 7
    _login(client, MANAGER)

    response = client.post("/api/chat/send", json={"receiver_id": "admin-1", "text": "Bonjour"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Message envoyé", "id": 7}
    args = container.chat_service.send.call_args.args
    assert args[0].principal_id == "manager-1"
    assert args[1:] == ("admin-1", "Bonjour")


def test_chat_send_validation_error(client, container):
    container.chat_service.send.side_effect = ValidationError("Destinataire invalide")
    _login(client, ADMIN)

    response = client.post("/api/chat/send", json={"receiver_id": "", "text": "Bonjour"})

    assert response.status_code == 400
    assert response.get_json() == {"success": False, "message": "Destinataire invalide"}


def test_unexpected_json_error_is_generic(client, container):
    container.chat_service.send.side_effect = RuntimeError("db down")
    _login(client, ADMIN)

    response = client.post("/api/chat/send", json={"receiver_id": "manager-1", "text": "Bonjour"})

    assert response.status_code == 500
    assert response.get_json()["message"] == "Erreur système"


def test_mark_attendance_json(client, container):
    _login(client, MANAGER)

    response = client.post("/attendance/mark", json={"employee_id": 2, "work_date": "2024-07-23", "present": True})

    assert response.get_json() == {"success": True, "present": True}
    _, employee_id, work_date, present = container.attendance_service.mark.call_args.args
    assert (employee_id, work_date.isoformat(), present) == (2, "2024-07-23", True)


def test_maintenance_mode(client, container):
    container.owner_service.get_site_settings.return_value = SiteSettings(
        is_under_maintenance=True, maintenance_message="Retour à 14h"
    )

    response = client.get("/")

    assert response.status_code == 503
    assert "Retour à 14h".encode() in response.data


def test_owner_passes_maintenance(client, container):
    container.owner_service.get_site_settings.return_value = SiteSettings(is_under_maintenance=True)
    _login(client, SessionUser(user_id=0, name="Propriétaire", role=Role.OWNER))

    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/owner")
