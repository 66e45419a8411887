from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from ..core.enums import LoanStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_json, placeholders, to_decimal, to_json
from .model import ArchivedPayroll, DepartmentTotal, PayStub
from .repository import ClosedPeriod, PayrollRepository

_STUB_COLUMNS = """
    stub_id, company_id, archive_id, employee_id, employee_name, period_label, pay_date, days_present,
    daily_wage_at_time, base_pay, adjustments_json, total_adjustments, loan_repayment, total_pay
"""


def _map_archive(row: dict) -> ArchivedPayroll:
    departments = from_json(row.get("departments_json"), [])
    return ArchivedPayroll(
        archive_id=int(row["archive_id"]),
        company_id=int(row["company_id"]),
        period_label=row["period_label"],
        period_start=row["period_start"],
        period_end=row["period_end"],
        total_payroll=to_decimal(row["total_payroll"]),
        departments=tuple(
            DepartmentTotal(name=d["name"], total=to_decimal(d["total"]), employee_count=int(d["employee_count"]))
            for d in departments
        ),
        closed_at=row["closed_at"],
    )


def _map_stub(row: dict) -> PayStub:
    archive_id = row.get("archive_id")
    return PayStub(
        stub_id=int(row["stub_id"]),
        company_id=int(row["company_id"]),
        archive_id=int(archive_id) if archive_id is not None else None,
        employee_id=int(row["employee_id"]),
        employee_name=row["employee_name"],
        period_label=row["period_label"],
        pay_date=row["pay_date"],
        days_present=int(row["days_present"]),
        daily_wage_at_time=to_decimal(row["daily_wage_at_time"]),
        base_pay=to_decimal(row["base_pay"]),
        adjustments=tuple(from_json(row.get("adjustments_json"), [])),
        total_adjustments=to_decimal(row["total_adjustments"]),
        loan_repayment=to_decimal(row["loan_repayment"]),
        total_pay=to_decimal(row["total_pay"]),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def close_period(
        self,
        *,
        company_id: int,
        period_label: str,
        period_start: date,
        period_end: date,
        next_period_start: date,
        total_payroll: Decimal,
        departments: Sequence[DepartmentTotal],
        stubs: Sequence[PayStub],
        loan_repayments: Sequence[Tuple[int, Decimal]],
        closed_at: datetime,
    ) -> ClosedPeriod:
        with db_cursor(self._conn_factory) as (_, cur):
            # Moving the period first makes a concurrent second close fail instead of archiving twice.
            cur.execute(
                "UPDATE companies SET current_period_start=%s WHERE company_id=%s AND current_period_start=%s",
                (next_period_start, company_id, period_start),
            )
            if cur.rowcount != 1:
                raise ValidationError("Cette période a déjà été clôturée.")

            cur.execute(
                """
                INSERT INTO payroll_archives(company_id, period_label, period_start, period_end, total_payroll,
                                             departments_json, closed_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    company_id,
                    period_label,
                    period_start,
                    period_end,
                    total_payroll,
                    to_json([d.to_dict() for d in departments]),
                    closed_at,
                ),
            )
            archive_id = int(cur.lastrowid)

            for s in stubs:
                cur.execute(
                    """
                    INSERT INTO pay_stubs(company_id, archive_id, employee_id, employee_name, period_label, pay_date,
                                          days_present, daily_wage_at_time, base_pay, adjustments_json,
                                          total_adjustments, loan_repayment, total_pay)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        company_id,
                        archive_id,
                        s.employee_id,
                        s.employee_name,
                        s.period_label,
                        s.pay_date,
                        s.days_present,
                        s.daily_wage_at_time,
                        s.base_pay,
                        to_json(list(s.adjustments)),
                        s.total_adjustments,
                        s.loan_repayment,
                        s.total_pay,
                    ),
                )

            loan_ids = [int(loan_id) for loan_id, _ in loan_repayments]
            for loan_id, amount in loan_repayments:
                # MySQL applies SET assignments left to right: status sees the new balance.
                cur.execute(
                    """
                    UPDATE loans
                    SET balance=GREATEST(balance - %s, 0),
                        status=IF(balance <= 0, %s, status)
                    WHERE loan_id=%s AND company_id=%s AND status=%s
                    """,
                    (amount, LoanStatus.REPAID.value, loan_id, company_id, LoanStatus.ACTIVE.value),
                )

            repaid: Tuple[int, ...] = ()
            if loan_ids:
                cur.execute(
                    f"SELECT loan_id FROM loans WHERE loan_id IN ({placeholders(loan_ids)}) AND status=%s",
                    (*loan_ids, LoanStatus.REPAID.value),
                )
                repaid = tuple(int(r["loan_id"]) for r in fetchall(cur))

            cur.execute("UPDATE employees SET current_wage=daily_wage WHERE company_id=%s", (company_id,))
            cur.execute(
                "DELETE a FROM adjustments a JOIN employees e ON e.employee_id=a.employee_id WHERE e.company_id=%s",
                (company_id,),
            )
            return ClosedPeriod(archive_id=archive_id, repaid_loan_ids=repaid)

    def list_archives(self, company_id: int) -> Sequence[ArchivedPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT archive_id, company_id, period_label, period_start, period_end, total_payroll,
                       departments_json, closed_at
                FROM payroll_archives
                WHERE company_id=%s
                ORDER BY closed_at DESC, archive_id DESC
                """,
                (company_id,),
            )
            return [_map_archive(r) for r in fetchall(cur)]

    def get_archive(self, archive_id: int) -> Optional[ArchivedPayroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT archive_id, company_id, period_label, period_start, period_end, total_payroll,
                       departments_json, closed_at
                FROM payroll_archives
                WHERE archive_id=%s
                """,
                (archive_id,),
            )
            row = fetchone(cur)
            return _map_archive(row) if row else None

    def delete_archive(self, archive_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_archives WHERE archive_id=%s", (archive_id,))
            return cur.rowcount > 0

    def list_stubs_for_employee(self, employee_id: int, *, limit: int) -> List[PayStub]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_STUB_COLUMNS}
                FROM pay_stubs
                WHERE employee_id=%s
                ORDER BY pay_date DESC, stub_id DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_map_stub(r) for r in fetchall(cur)]

    def list_stubs_for_archive(self, archive_id: int) -> List[PayStub]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STUB_COLUMNS} FROM pay_stubs WHERE archive_id=%s ORDER BY employee_name",
                (archive_id,),
            )
            return [_map_stub(r) for r in fetchall(cur)]
