from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceJustification
from .repository import JustificationRepository

_SELECT = """
    SELECT j.justification_id, j.company_id, j.employee_id, j.work_date, j.reason, j.document_url, j.status,
           j.created_at, j.reviewed_by, j.reviewed_at,
           CONCAT(e.first_name, ' ', e.last_name) AS employee_name, e.department_id
    FROM justifications j
    JOIN employees e ON e.employee_id = j.employee_id
"""


def _map(row: dict) -> AbsenceJustification:
    return AbsenceJustification(
        justification_id=int(row["justification_id"]),
        company_id=int(row["company_id"]),
        employee_id=int(row["employee_id"]),
        work_date=row["work_date"],
        reason=row["reason"],
        status=RequestStatus(row["status"]),
        created_at=row["created_at"],
        document_url=row.get("document_url"),
        reviewed_by=row.get("reviewed_by"),
        reviewed_at=row.get("reviewed_at"),
        employee_name=row.get("employee_name") or "",
        department_id=row.get("department_id"),
    )


class MySQLJustificationRepository(JustificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, justification_id: int) -> Optional[AbsenceJustification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE j.justification_id=%s", (justification_id,))
            row = fetchone(cur)
            return _map(row) if row else None

    def find_pending(self, employee_id: int, work_date: date) -> Optional[AbsenceJustification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE j.employee_id=%s AND j.work_date=%s AND j.status=%s LIMIT 1",
                (employee_id, work_date, RequestStatus.PENDING.value),
            )
            row = fetchone(cur)
            return _map(row) if row else None

    def list_for_company(
        self,
        company_id: int,
        *,
        status: Optional[RequestStatus] = None,
        department_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[AbsenceJustification]:
        sql = _SELECT + " WHERE j.company_id=%s"
        params: list = [company_id]
        if status is not None:
            sql += " AND j.status=%s"
            params.append(status.value)
        if department_id is not None:
            sql += " AND e.department_id=%s"
            params.append(department_id)
        sql += " ORDER BY j.created_at DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_map(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, *, limit: int = 100) -> Sequence[AbsenceJustification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE j.employee_id=%s ORDER BY j.created_at DESC LIMIT %s",
                (employee_id, int(limit)),
            )
            return [_map(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        company_id: int,
        employee_id: int,
        work_date: date,
        reason: str,
        document_url: Optional[str],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO justifications(company_id, employee_id, work_date, reason, document_url, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (company_id, employee_id, work_date, reason, document_url, RequestStatus.PENDING.value, created_at),
            )
            return int(cur.lastrowid)

    def decide(
        self, justification_id: int, *, status: RequestStatus, reviewed_by: str, reviewed_at: datetime
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE justifications
                SET status=%s, reviewed_by=%s, reviewed_at=%s
                WHERE justification_id=%s AND status=%s
                """,
                (status.value, reviewed_by, reviewed_at, justification_id, RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
