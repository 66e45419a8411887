from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import AuditAction
from .model import AuditEntry, LoginLog


class AuditRepository(Protocol):
    def add_entry(
        self, *, company_id: int, action: AuditAction, user_name: str, details: str, created_at: datetime
    ) -> int:
        raise NotImplementedError

    def list_entries(self, company_id: int, *, limit: int) -> Sequence[AuditEntry]:
        raise NotImplementedError

    def add_login(
        self,
        *,
        company_id: int,
        company_name: str,
        user_name: str,
        user_type: str,
        details: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def list_logins(self, company_id: int, *, limit: int) -> Sequence[LoginLog]:
        raise NotImplementedError
