from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import CompanyStatus, PayPeriod
from .model import Company, RegistrationCode, SiteSettings


class CompanyRepository(Protocol):
    """Storage for companies and their registration codes."""

    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError

    def get_by_identifier(self, identifier: str) -> Optional[Company]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Company]:
        raise NotImplementedError

    def register(
        self,
        *,
        code: str,
        identifier: str,
        name: str,
        super_admin_name: str,
        super_admin_email: str,
        super_admin_phone: str,
        password_hash: str,
        pay_period: PayPeriod,
        currency: str,
        current_period_start: date,
        registered_at: datetime,
    ) -> int:
        """Create company + super admin and mark the code used, in one transaction."""
        raise NotImplementedError

    def update_profile(
        self,
        company_id: int,
        *,
        name: str,
        description: Optional[str],
        logo_url: Optional[str],
        pay_period: PayPeriod,
        currency: str,
        current_period_start: date,
    ) -> None:
        raise NotImplementedError

    def update_identity(self, company_id: int, *, name: str, identifier: str) -> None:
        raise NotImplementedError

    def set_status(self, company_id: int, status: CompanyStatus) -> None:
        raise NotImplementedError

    def delete_company(self, company_id: int) -> bool:
        raise NotImplementedError

    def get_registration_code(self, code: str) -> Optional[RegistrationCode]:
        raise NotImplementedError

    def get_code_for_company(self, company_id: int) -> Optional[RegistrationCode]:
        raise NotImplementedError

    def create_registration_code(self, *, code: str, created_at: datetime, expires_at: Optional[datetime]) -> None:
        raise NotImplementedError

    def list_registration_codes(self, *, limit: int) -> Sequence[RegistrationCode]:
        raise NotImplementedError


class SiteSettingsRepository(Protocol):
    def get(self) -> SiteSettings:
        raise NotImplementedError

    def save(self, settings: SiteSettings) -> None:
        raise NotImplementedError
