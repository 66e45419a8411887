from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import AuditAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditEntry, LoginLog
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_entry(
        self, *, company_id: int, action: AuditAction, user_name: str, details: str, created_at: datetime
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO audit_logs(company_id, action, user_name, details, created_at) VALUES(%s,%s,%s,%s,%s)",
                (company_id, action.value, user_name, details, created_at),
            )
            return int(cur.lastrowid)

    def list_entries(self, company_id: int, *, limit: int) -> Sequence[AuditEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, company_id, action, user_name, details, created_at
                FROM audit_logs
                WHERE company_id=%s
                ORDER BY created_at DESC, log_id DESC
                LIMIT %s
                """,
                (company_id, int(limit)),
            )
            return [
                AuditEntry(
                    log_id=int(r["log_id"]),
                    company_id=int(r["company_id"]),
                    action=AuditAction(r["action"]),
                    user_name=r["user_name"],
                    details=r["details"],
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO login_logs(company_id, company_name, user_name, user_type, details, created_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (company_id, company_name, user_name, user_type, details, created_at),
            )
            return int(cur.lastrowid)

    def list_logins(self, company_id: int, *, limit: int) -> Sequence[LoginLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, company_id, company_name, user_name, user_type, details, created_at
                FROM login_logs
                WHERE company_id=%s
                ORDER BY created_at DESC, log_id DESC
                LIMIT %s
                """,
                (company_id, int(limit)),
            )
            return [
                LoginLog(
                    log_id=int(r["log_id"]),
                    company_id=int(r["company_id"]),
                    company_name=r["company_name"],
                    user_name=r["user_name"],
                    user_type=r["user_type"],
                    details=r["details"],
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]
