from __future__ import annotations

from datetime import date
from typing import Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employees(self, employee_ids: Sequence[int], start: date, end: date) -> Dict[int, Dict[date, bool]]:
        ids = [int(i) for i in employee_ids]
        out: Dict[int, Dict[date, bool]] = {i: {} for i in ids}
        if not ids:
            return out

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, work_date, is_present
                FROM attendance
                WHERE employee_id IN ({placeholders(ids)}) AND work_date BETWEEN %s AND %s
                """,
                (*ids, start, end),
            )
            for r in fetchall(cur):
                out[int(r["employee_id"])][r["work_date"]] = bool(r["is_present"])
        return out

    def set_day(self, employee_id: int, work_date: date, is_present: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, is_present)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE is_present=VALUES(is_present)
                """,
                (employee_id, work_date, int(bool(is_present))),
            )
