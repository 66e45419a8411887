from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _map(row: dict) -> Notification:
        return Notification(
            notification_id=int(row["notification_id"]),
            company_id=int(row["company_id"]),
            title=row["title"],
            description=row["description"],
            link=row.get("link"),
            notification_type=NotificationType(row["notification_type"]),
            is_read=bool(row["is_read"]),
            created_at=row["created_at"],
        )

    def add(
        self,
        *,
        company_id: int,
        title: str,
        description: str,
        link: Optional[str],
        notification_type: NotificationType,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(company_id, title, description, link, notification_type, is_read, created_at)
                VALUES(%s,%s,%s,%s,%s,0,%s)
                """,
                (company_id, title, description, link, notification_type.value, created_at),
            )
            return int(cur.lastrowid)

    def list_for_company(self, company_id: int, *, limit: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id, company_id, title, description, link, notification_type, is_read, created_at
                FROM notifications
                WHERE company_id=%s
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (company_id, int(limit)),
            )
            return [self._map(r) for r in fetchall(cur)]

    def count_unread(self, company_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM notifications WHERE company_id=%s AND is_read=0", (company_id,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def mark_read(self, company_id: int, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE company_id=%s AND notification_id=%s",
                (company_id, notification_id),
            )
            if cur.rowcount > 0:
                return True
            # Already read rows report 0 affected rows.
            cur.execute(
                "SELECT 1 AS found FROM notifications WHERE company_id=%s AND notification_id=%s",
                (company_id, notification_id),
            )
            return fetchone(cur) is not None

    def mark_all_read(self, company_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE company_id=%s AND is_read=0", (company_id,))
            return int(cur.rowcount)
