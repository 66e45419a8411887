from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import LoanStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Loan
from .repository import LoanRepository

_COLUMNS = "loan_id, company_id, employee_id, amount, repayment_amount, balance, start_date, status, created_at"


def map_loan(row: dict) -> Loan:
    return Loan(
        loan_id=int(row["loan_id"]),
        company_id=int(row["company_id"]),
        employee_id=int(row["employee_id"]),
        amount=to_decimal(row["amount"]),
        repayment_amount=to_decimal(row["repayment_amount"]),
        balance=to_decimal(row["balance"]),
        start_date=row["start_date"],
        status=LoanStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLLoanRepository(LoanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM loans WHERE loan_id=%s", (loan_id,))
            row = fetchone(cur)
            return map_loan(row) if row else None

    def get_active_for_employee(self, employee_id: int) -> Optional[Loan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM loans WHERE employee_id=%s AND status=%s ORDER BY created_at DESC LIMIT 1",
                (employee_id, LoanStatus.ACTIVE.value),
            )
            row = fetchone(cur)
            return map_loan(row) if row else None

    def list_for_company(self, company_id: int, *, status: Optional[LoanStatus] = None) -> Sequence[Loan]:
        sql = f"SELECT {_COLUMNS} FROM loans WHERE company_id=%s"
        params: list = [company_id]
        if status is not None:
            sql += " AND status=%s"
            params.append(status.value)
        sql += " ORDER BY created_at DESC, loan_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [map_loan(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        company_id: int,
        employee_id: int,
        amount: Decimal,
        repayment_amount: Decimal,
        start_date: date,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO loans(company_id, employee_id, amount, repayment_amount, balance, start_date, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    company_id,
                    employee_id,
                    amount,
                    repayment_amount,
                    amount,
                    start_date,
                    LoanStatus.ACTIVE.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def set_status(self, loan_id: int, status: LoanStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE loans SET status=%s WHERE loan_id=%s", (status.value, loan_id))
