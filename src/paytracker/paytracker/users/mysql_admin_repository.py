from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AdminRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Admin
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _map(row: dict) -> Admin:
        return Admin(
            admin_id=int(row["admin_id"]),
            company_id=int(row["company_id"]),
            name=row["name"],
            password_hash=row["password_hash"],
            role=AdminRole(row["role"]),
        )

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, company_id, name, password_hash, role FROM admins WHERE admin_id=%s",
                (admin_id,),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def get_by_name(self, company_id: int, name: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT admin_id, company_id, name, password_hash, role
                FROM admins
                WHERE company_id=%s AND name=%s
                """,
                (company_id, name),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def list_for_company(self, company_id: int) -> Sequence[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT admin_id, company_id, name, password_hash, role
                FROM admins
                WHERE company_id=%s
                ORDER BY role DESC, name
                """,
                (company_id,),
            )
            return [self._map(r) for r in fetchall(cur)]

    def create(self, *, company_id: int, name: str, password_hash: str, role: AdminRole) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admins(company_id, name, password_hash, role) VALUES(%s,%s,%s,%s)",
                (company_id, name, password_hash, role.value),
            )
            return int(cur.lastrowid)

    def update_password(self, admin_id: int, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE admins SET password_hash=%s WHERE admin_id=%s", (password_hash, admin_id))

    def delete(self, admin_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM admins WHERE admin_id=%s", (admin_id,))
            return cur.rowcount > 0
