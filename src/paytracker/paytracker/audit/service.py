from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOG_LIMIT
from ..core.enums import AuditAction
from .model import AuditEntry, LoginLog
from .repository import AuditRepository

audit_logger = logging.getLogger("paytracker.audit")


class AuditService:
    """Records who did what, in the database and on the ``paytracker.audit`` logger."""

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def record(
        self,
        company_id: int,
        action: AuditAction,
        user_name: str,
        details: str,
        *,
        now: Optional[datetime] = None,
    ) -> int:
        audit_logger.info("company=%s action=%s user=%s %s", company_id, action.value, user_name, details)
        return self._audit.add_entry(
            company_id=int(company_id),
            action=action,
            user_name=user_name or "Système",
            details=details,
            created_at=now or now_local(),
        )

    def record_login(
        self,
        *,
        company_id: int,
        company_name: str,
        user_name: str,
        user_type: str,
        details: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        audit_logger.info("company=%s login %s=%s", company_id, user_type, user_name)
        return self._audit.add_login(
            company_id=int(company_id),
            company_name=company_name,
            user_name=user_name,
            user_type=user_type,
            details=details,
            created_at=now or now_local(),
        )

    def list_audit(self, company_id: int, *, limit: int = DEFAULT_LOG_LIMIT) -> Sequence[AuditEntry]:
        return self._audit.list_entries(int(company_id), limit=limit)

    def list_logins(self, company_id: int, *, limit: int = DEFAULT_LOG_LIMIT) -> Sequence[LoginLog]:
        return self._audit.list_logins(int(company_id), limit=limit)
