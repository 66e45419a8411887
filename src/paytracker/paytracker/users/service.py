from __future__ import annotations

import hmac
import logging
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..audit.service import AuditService
from ..common.validators import require_min_length, require_non_empty
from ..companies.model import Company
from ..companies.service import CompanyService
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AdminRole, AuditAction, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from .model import Admin, SessionUser
from .repository import AdminRepository

logger = logging.getLogger(__name__)

OWNER_DISPLAY_NAME = "Propriétaire"


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # Placeholder or corrupted hashes never match.
        return False


class AuthService:
    """Use case: log in as admin, department manager, employee or platform owner."""

    def __init__(
        self,
        companies: CompanyService,
        admins: AdminRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        audit: AuditService,
        *,
        owner_password: str = "",
    ):
        self._companies = companies
        self._admins = admins
        self._employees = employees
        self._departments = departments
        self._audit = audit
        self._owner_password = owner_password or ""

    def login_admin(self, identifier: str, name: str, password: str, *, now: Optional[datetime] = None) -> SessionUser:
        company = self._companies.find_by_identifier(identifier, now=now)

        admin = self._admins.get_by_name(company.company_id, (name or "").strip())
        if not admin or not _password_matches(admin.password_hash, password):
            raise AuthenticationError("Nom ou mot de passe incorrect.")

        if company.is_suspended and admin.role != AdminRole.SUPERADMIN:
            raise AuthenticationError(
                "Le compte de cette entreprise est suspendu. Seul le super administrateur peut se connecter."
            )

        self._audit.record_login(
            company_id=company.company_id,
            company_name=company.name,
            user_name=admin.name,
            user_type=Role.ADMIN.value,
            details=f"Connexion administrateur ({admin.role.value})",
            now=now,
        )
        return SessionUser(
            user_id=admin.admin_id,
            name=admin.name,
            role=Role.ADMIN,
            company_id=company.company_id,
            company_name=company.name,
            admin_role=admin.role,
            currency=company.currency,
        )

    def _active_company(self, identifier: str, now: Optional[datetime], contact: str) -> Company:
        company = self._companies.find_by_identifier(identifier, now=now)
        if company.is_suspended:
            raise AuthenticationError(
                f"Le compte de cette entreprise est temporairement suspendu. Veuillez contacter votre {contact}."
            )
        return company

    def login_manager(self, identifier: str, pin: str, *, now: Optional[datetime] = None) -> SessionUser:
        """The PIN is the manager's phone number."""
        company = self._active_company(identifier, now, "administrateur")

        manager = self._employees.get_by_phone(company.company_id, (pin or "").strip())
        if not manager:
            raise AuthenticationError("Aucun employé trouvé avec ce code PIN.")

        department = self._departments.get_by_manager(company.company_id, manager.employee_id)
        if not department:
            raise AuthenticationError("Vous n'êtes pas assigné comme responsable à un département.")

        self._audit.record_login(
            company_id=company.company_id,
            company_name=company.name,
            user_name=manager.full_name,
            user_type=Role.MANAGER.value,
            details=f"Connexion responsable du département {department.name}",
            now=now,
        )
        return SessionUser(
            user_id=manager.employee_id,
            name=manager.full_name,
            role=Role.MANAGER,
            company_id=company.company_id,
            company_name=company.name,
            department_id=department.department_id,
            department_name=department.name,
            currency=company.currency,
        )

    def login_employee(self, identifier: str, phone: str, *, now: Optional[datetime] = None) -> SessionUser:
        company = self._active_company(identifier, now, "responsable")

        employee = self._employees.get_by_phone(company.company_id, (phone or "").strip())
        if not employee:
            raise AuthenticationError("Aucun employé trouvé avec ce numéro de téléphone.")

        return SessionUser(
            user_id=employee.employee_id,
            name=employee.full_name,
            role=Role.EMPLOYEE,
            company_id=company.company_id,
            company_name=company.name,
            department_id=employee.department_id,
            currency=company.currency,
        )

    def login_owner(self, password: str) -> SessionUser:
        if not self._owner_password:
            logger.warning("Owner login attempted but OWNER_PASSWORD is not configured")
            raise AuthenticationError("Accès propriétaire non configuré.")
        if not hmac.compare_digest((password or "").encode("utf-8"), self._owner_password.encode("utf-8")):
            raise AuthenticationError("Mot de passe incorrect.")
        return SessionUser(user_id=0, name=OWNER_DISPLAY_NAME, role=Role.OWNER)


class AdminService:
    """Use case: manage the administrators of one company."""

    def __init__(self, admins: AdminRepository, audit: AuditService):
        self._admins = admins
        self._audit = audit

    @staticmethod
    def _require_admin(actor: SessionUser) -> int:
        if actor.role != Role.ADMIN or not actor.company_id:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")
        return int(actor.company_id)

    def list_admins(self, actor: SessionUser) -> Sequence[Admin]:
        return self._admins.list_for_company(self._require_admin(actor))

    def add_admin(self, actor: SessionUser, *, name: str, password: str) -> int:
        company_id = self._require_admin(actor)
        if not actor.is_superadmin:
            raise AuthorizationError("Seul le super administrateur peut ajouter un administrateur")

        name = require_non_empty(name, "Nom")
        require_min_length(password, "Mot de passe", MIN_PASSWORD_LENGTH)
        if self._admins.get_by_name(company_id, name):
            raise ValidationError("Un administrateur avec ce nom existe déjà dans cette entreprise.")

        admin_id = self._admins.create(
            company_id=company_id,
            name=name,
            password_hash=generate_password_hash(password),
            role=AdminRole.ADJOINT,
        )
        self._audit.record(company_id, AuditAction.ADMIN_ADD, actor.name, f"Ajout de l'administrateur adjoint {name}")
        return admin_id

    def change_password(self, actor: SessionUser, *, current_password: str, new_password: str) -> None:
        company_id = self._require_admin(actor)
        admin = self._admins.get_by_id(actor.user_id)
        if not admin or admin.company_id != company_id:
            raise NotFoundError("Administrateur non trouvé.")
        if not _password_matches(admin.password_hash, current_password):
            raise ValidationError("Le mot de passe actuel est incorrect.")
        require_min_length(new_password, "Nouveau mot de passe", MIN_PASSWORD_LENGTH)

        self._admins.update_password(admin.admin_id, generate_password_hash(new_password))
        logger.info("Admin %s changed password", admin.admin_id)

    def delete_admin(self, actor: SessionUser, admin_id: int) -> None:
        company_id = self._require_admin(actor)
        if not actor.is_superadmin:
            raise AuthorizationError("Seul le super administrateur peut supprimer un administrateur")

        admin = self._admins.get_by_id(int(admin_id))
        if not admin or admin.company_id != company_id or admin.role == AdminRole.SUPERADMIN:
            raise ValidationError("Impossible de supprimer cet administrateur.")

        if not self._admins.delete(admin.admin_id):
            raise ValidationError("Impossible de supprimer cet administrateur.")
        self._audit.record(company_id, AuditAction.ADMIN_DELETE, actor.name, f"Suppression de l'administrateur {admin.name}")
