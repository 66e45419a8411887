from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import COMPANY_IDENTIFIER_PREFIX, DEFAULT_CURRENCY, MIN_PASSWORD_LENGTH
from ..core.enums import PayPeriod, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..payroll.period import PeriodWindow, build_period
from ..users.model import SessionUser
from .model import Company
from .repository import CompanyRepository

logger = logging.getLogger(__name__)


def normalize_identifier(value: str) -> str:
    """``123`` / ``ept-123`` / ``EPT-123`` -> ``EPT-123``."""
    raw = (value or "").strip().upper()
    if raw.startswith(COMPANY_IDENTIFIER_PREFIX):
        raw = raw[len(COMPANY_IDENTIFIER_PREFIX):]
    raw = raw.strip()
    if not raw:
        raise ValidationError("Identifiant d'entreprise est obligatoire")
    if not raw.replace("-", "").isalnum():
        raise ValidationError("Identifiant d'entreprise invalide")
    return f"{COMPANY_IDENTIFIER_PREFIX}{raw}"


def normalize_currency(value: Optional[str]) -> str:
    code = (value or DEFAULT_CURRENCY).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError("Code devise invalide (ex: XOF, EUR)")
    return code


def parse_pay_period(value) -> PayPeriod:
    try:
        return PayPeriod(value)
    except ValueError:
        raise ValidationError("Période de paie invalide")


class CompanyService:
    """Use cases around a company: registration, lookup at login, profile settings."""

    def __init__(self, companies: CompanyRepository):
        self._companies = companies

    def register_company(
        self,
        *,
        code: str,
        identifier: str,
        company_name: str,
        admin_name: str,
        admin_email: str,
        admin_phone: str,
        password: str,
        pay_period,
        currency: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        code = require_non_empty(code, "Code d'inscription")
        identifier = normalize_identifier(identifier)
        company_name = require_non_empty(company_name, "Nom de l'entreprise")
        admin_name = require_non_empty(admin_name, "Nom de l'administrateur")
        require_min_length(password, "Mot de passe", MIN_PASSWORD_LENGTH)
        period = parse_pay_period(pay_period)
        currency_code = normalize_currency(currency)
        now = now or now_local()

        reg = self._companies.get_registration_code(code)
        if not reg:
            raise ValidationError("Code d'inscription invalide.")
        if reg.is_used:
            raise ValidationError("Ce code d'inscription a déjà été utilisé.")
        if reg.is_expired(now):
            raise ValidationError("Ce code d'inscription a expiré.")

        if self._companies.get_by_identifier(identifier):
            raise ValidationError("Une entreprise avec cet identifiant existe déjà.")

        company_id = self._companies.register(
            code=code,
            identifier=identifier,
            name=company_name,
            super_admin_name=admin_name,
            super_admin_email=(admin_email or "").strip(),
            super_admin_phone=(admin_phone or "").strip(),
            password_hash=generate_password_hash(password),
            pay_period=period,
            currency=currency_code,
            current_period_start=build_period(period, now.date()).start,
            registered_at=now,
        )
        logger.info("Registered company %s (%s) with code %s", identifier, company_id, code)
        return company_id

    def find_by_identifier(self, identifier: str, *, now: Optional[datetime] = None) -> Company:
        """Company for a login form. Refused once the trial of its registration code is over."""
        try:
            normalized = normalize_identifier(identifier)
        except ValidationError:
            raise AuthenticationError("Identifiant d'entreprise introuvable.")

        company = self._companies.get_by_identifier(normalized)
        if not company:
            raise AuthenticationError("Identifiant d'entreprise introuvable.")

        reg = self._companies.get_code_for_company(company.company_id)
        if reg and reg.is_expired(now or now_local()):
            raise AuthenticationError(
                "Votre période d'essai a expiré. Veuillez contacter le propriétaire pour activer votre compte "
                "de façon permanente."
            )
        return company

    def get(self, company_id: int) -> Company:
        company = self._companies.get_by_id(int(company_id))
        if not company:
            raise NotFoundError("Entreprise introuvable")
        return company

    def current_period(self, company: Company) -> PeriodWindow:
        return build_period(company.pay_period, company.current_period_start)

    def update_profile(
        self,
        actor: SessionUser,
        *,
        name: str,
        description: str = "",
        logo_url: str = "",
        pay_period=None,
        currency: Optional[str] = None,
    ) -> Company:
        if actor.role != Role.ADMIN or not actor.company_id:
            raise AuthorizationError("Vous n'avez pas les droits nécessaires")

        company = self.get(actor.company_id)
        name = require_non_empty(name, "Nom de l'entreprise")
        period = parse_pay_period(pay_period) if pay_period else company.pay_period
        currency_code = normalize_currency(currency or company.currency)

        period_start = company.current_period_start
        if period != company.pay_period:
            # The open period is re-cut around the day it started.
            period_start = build_period(period, company.current_period_start).start

        self._companies.update_profile(
            company.company_id,
            name=name,
            description=(description or "").strip() or None,
            logo_url=(logo_url or "").strip() or None,
            pay_period=period,
            currency=currency_code,
            current_period_start=period_start,
        )
        return self.get(company.company_id)
