from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditEntry:
    log_id: int
    company_id: int
    action: AuditAction
    user_name: str
    details: str
    created_at: datetime


@dataclass(frozen=True)
class LoginLog:
    """One successful admin or manager login."""

    log_id: int
    company_id: int
    company_name: str
    user_name: str
    user_type: str
    details: str
    created_at: datetime
