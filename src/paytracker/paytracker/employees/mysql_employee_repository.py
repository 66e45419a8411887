from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, company_id, first_name, last_name, position, department_id, birth_date,
    address, phone, photo_url, daily_wage, current_wage, registered_on
"""


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _map(row: dict) -> Employee:
        return Employee(
            employee_id=int(row["employee_id"]),
            company_id=int(row["company_id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            position=row.get("position") or "",
            department_id=row.get("department_id"),
            phone=row["phone"],
            daily_wage=to_decimal(row["daily_wage"]),
            current_wage=to_decimal(row["current_wage"]),
            registered_on=row["registered_on"],
            birth_date=row.get("birth_date"),
            address=row.get("address") or "",
            photo_url=row.get("photo_url") or "",
        )

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return self._map(row) if row else None

    def get_by_phone(self, company_id: int, phone: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE company_id=%s AND phone=%s",
                (company_id, phone),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def list_for_company(self, company_id: int, *, department_id: Optional[int] = None) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees WHERE company_id=%s"
        params: list = [company_id]
        if department_id is not None:
            sql += " AND department_id=%s"
            params.append(department_id)
        sql += " ORDER BY last_name, first_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._map(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        company_id: int,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        birth_date: Optional[date],
        address: str,
        phone: str,
        photo_url: str,
        daily_wage: Decimal,
        registered_on: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(company_id, first_name, last_name, position, department_id, birth_date,
                                      address, phone, photo_url, daily_wage, current_wage, registered_on)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    company_id,
                    first_name,
                    last_name,
                    position,
                    department_id,
                    birth_date,
                    address,
                    phone,
                    photo_url,
                    daily_wage,
                    daily_wage,
                    registered_on,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        employee_id: int,
        *,
        first_name: str,
        last_name: str,
        position: str,
        department_id: Optional[int],
        birth_date: Optional[date],
        address: str,
        phone: str,
        photo_url: str,
        daily_wage: Decimal,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, position=%s, department_id=%s, birth_date=%s,
                    address=%s, phone=%s, photo_url=%s, daily_wage=%s
                WHERE employee_id=%s
                """,
                (
                    first_name,
                    last_name,
                    position,
                    department_id,
                    birth_date,
                    address,
                    phone,
                    photo_url,
                    daily_wage,
                    employee_id,
                ),
            )

    def set_department(self, employee_id: int, department_id: Optional[int]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET department_id=%s WHERE employee_id=%s", (department_id, employee_id))

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0

    def count_in_department(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE department_id=%s", (department_id,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
