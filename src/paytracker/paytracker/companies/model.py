from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY
from ..core.enums import CompanyStatus, PayPeriod


@dataclass(frozen=True)
class Company:
    """A tenant. Every other record belongs to exactly one company."""

    company_id: int
    identifier: str
    name: str
    super_admin_name: str
    super_admin_email: str
    super_admin_phone: str
    pay_period: PayPeriod
    current_period_start: date
    status: CompanyStatus = CompanyStatus.ACTIVE
    currency: str = DEFAULT_CURRENCY
    logo_url: Optional[str] = None
    description: Optional[str] = None
    registered_at: Optional[datetime] = None

    @property
    def is_suspended(self) -> bool:
        return self.status == CompanyStatus.SUSPENDED


@dataclass(frozen=True)
class RegistrationCode:
    code: str
    is_used: bool
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    used_by_company_id: Optional[int] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now


@dataclass(frozen=True)
class SiteSettings:
    is_under_maintenance: bool = False
    maintenance_message: str = ""


@dataclass(frozen=True)
class CompanyOverview:
    """Owner dashboard row: a company with its administrators and registration code."""

    company: Company
    admins: tuple
    registration_code: Optional[RegistrationCode] = None

    @property
    def trial_expires_at(self) -> Optional[datetime]:
        return self.registration_code.expires_at if self.registration_code else None
