from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, REGISTRATION_CODE_DIGITS
from ..core.enums import CompanyStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import AdminRepository
from .model import Company, CompanyOverview, RegistrationCode, SiteSettings
from .repository import CompanyRepository, SiteSettingsRepository
from .service import normalize_identifier

logger = logging.getLogger(__name__)


def generate_code() -> str:
    """Random numeric code, never starting with 0."""
    low = 10 ** (REGISTRATION_CODE_DIGITS - 1)
    return str(low + secrets.randbelow(9 * low))


class OwnerService:
    """Platform owner back-office: every company, registration codes, site settings."""

    def __init__(
        self,
        companies: CompanyRepository,
        admins: AdminRepository,
        site_settings: SiteSettingsRepository,
    ):
        self._companies = companies
        self._admins = admins
        self._site_settings = site_settings

    def _get_company(self, company_id: int) -> Company:
        company = self._companies.get_by_id(int(company_id))
        if not company:
            raise NotFoundError("Entreprise introuvable")
        return company

    def list_companies(self) -> List[CompanyOverview]:
        return [
            CompanyOverview(
                company=c,
                admins=tuple(self._admins.list_for_company(c.company_id)),
                registration_code=self._companies.get_code_for_company(c.company_id),
            )
            for c in self._companies.list_all()
        ]

    def list_registration_codes(self, *, limit: int = 50) -> Sequence[RegistrationCode]:
        return self._companies.list_registration_codes(limit=limit)

    def generate_registration_code(
        self, *, trial_days: Optional[int] = None, now: Optional[datetime] = None
    ) -> RegistrationCode:
        now = now or now_local()
        if trial_days is not None and int(trial_days) <= 0:
            raise ValidationError("La durée d'essai doit être positive")
        expires_at = now + timedelta(days=int(trial_days)) if trial_days else None

        code = generate_code()
        while self._companies.get_registration_code(code):
            code = generate_code()

        self._companies.create_registration_code(code=code, created_at=now, expires_at=expires_at)
        logger.info("Generated registration code %s (expires %s)", code, expires_at)
        return RegistrationCode(code=code, is_used=False, created_at=now, expires_at=expires_at)

    def update_company_identity(self, company_id: int, *, name: str, identifier: str) -> None:
        company = self._get_company(company_id)
        name = require_non_empty(name, "Nom de l'entreprise")
        identifier = normalize_identifier(identifier)

        other = self._companies.get_by_identifier(identifier)
        if other and other.company_id != company.company_id:
            raise ValidationError("Une entreprise avec cet identifiant existe déjà.")

        self._companies.update_identity(company.company_id, name=name, identifier=identifier)

    def reset_admin_password(self, company_id: int, admin_id: int, new_password: str) -> None:
        require_min_length(new_password, "Mot de passe", MIN_PASSWORD_LENGTH)
        admin = self._admins.get_by_id(int(admin_id))
        if not admin or admin.company_id != int(company_id):
            raise NotFoundError("Administrateur non trouvé.")
        self._admins.update_password(admin.admin_id, generate_password_hash(new_password))
        logger.info("Owner reset password of admin %s (company %s)", admin_id, company_id)

    def set_company_status(self, company_id: int, status) -> CompanyStatus:
        company = self._get_company(company_id)
        try:
            new_status = CompanyStatus(status)
        except ValueError:
            raise ValidationError("Statut invalide")
        self._companies.set_status(company.company_id, new_status)
        logger.info("Company %s status -> %s", company.identifier, new_status.value)
        return new_status

    def toggle_suspension(self, company_id: int) -> CompanyStatus:
        company = self._get_company(company_id)
        target = CompanyStatus.ACTIVE if company.is_suspended else CompanyStatus.SUSPENDED
        return self.set_company_status(company.company_id, target)

    def delete_company(self, company_id: int) -> None:
        company = self._get_company(company_id)
        if not self._companies.delete_company(company.company_id):
            raise ValidationError("Suppression de l'entreprise échouée")
        logger.warning("Deleted company %s (%s) and all its data", company.identifier, company.company_id)

    def get_site_settings(self) -> SiteSettings:
        return self._site_settings.get()

    def update_site_settings(self, *, is_under_maintenance: bool, maintenance_message: str = "") -> SiteSettings:
        settings = SiteSettings(
            is_under_maintenance=bool(is_under_maintenance),
            maintenance_message=(maintenance_message or "").strip(),
        )
        self._site_settings.save(settings)
        logger.info("Site maintenance mode: %s", settings.is_under_maintenance)
        return settings
