from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _map(row: dict) -> Department:
        manager_id = row.get("manager_id")
        return Department(
            department_id=int(row["department_id"]),
            company_id=int(row["company_id"]),
            name=row["name"],
            manager_id=int(manager_id) if manager_id is not None else None,
        )

    def get_by_id(self, department_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT department_id, company_id, name, manager_id FROM departments WHERE department_id=%s",
                (department_id,),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def get_by_manager(self, company_id: int, manager_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT department_id, company_id, name, manager_id
                FROM departments
                WHERE company_id=%s AND manager_id=%s
                """,
                (company_id, manager_id),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def list_for_company(self, company_id: int) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT department_id, company_id, name, manager_id FROM departments WHERE company_id=%s ORDER BY name",
                (company_id,),
            )
            return [self._map(r) for r in fetchall(cur)]

    def create(self, *, company_id: int, name: str, manager_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(company_id, name, manager_id) VALUES(%s,%s,%s)",
                (company_id, name, manager_id),
            )
            return int(cur.lastrowid)

    def update(self, department_id: int, *, name: str, manager_id: Optional[int]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE departments SET name=%s, manager_id=%s WHERE department_id=%s",
                (name, manager_id, department_id),
            )

    def delete(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (department_id,))
            return cur.rowcount > 0
