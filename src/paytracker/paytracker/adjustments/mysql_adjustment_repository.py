from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from ..core.enums import AdjustmentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders, to_decimal
from .model import Adjustment
from .repository import AdjustmentRepository


def map_adjustment(row: dict) -> Adjustment:
    return Adjustment(
        adjustment_id=int(row["adjustment_id"]),
        employee_id=int(row["employee_id"]),
        adjustment_type=AdjustmentType(row["adjustment_type"]),
        amount=to_decimal(row["amount"]),
        reason=row["reason"],
        created_at=row["created_at"],
    )


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, adjustment_id: int) -> Optional[Adjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT adjustment_id, employee_id, adjustment_type, amount, reason, created_at
                FROM adjustments
                WHERE adjustment_id=%s
                """,
                (adjustment_id,),
            )
            row = fetchone(cur)
            return map_adjustment(row) if row else None

    def list_for_employees(self, employee_ids: Sequence[int]) -> Dict[int, List[Adjustment]]:
        ids = [int(i) for i in employee_ids]
        out: Dict[int, List[Adjustment]] = {i: [] for i in ids}
        if not ids:
            return out

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT adjustment_id, employee_id, adjustment_type, amount, reason, created_at
                FROM adjustments
                WHERE employee_id IN ({placeholders(ids)})
                ORDER BY created_at, adjustment_id
                """,
                tuple(ids),
            )
            for r in fetchall(cur):
                out[int(r["employee_id"])].append(map_adjustment(r))
        return out

    def create(
        self,
        *,
        employee_id: int,
        adjustment_type: AdjustmentType,
        amount: Decimal,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO adjustments(employee_id, adjustment_type, amount, reason, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, adjustment_type.value, amount, reason, created_at),
            )
            return int(cur.lastrowid)

    def delete(self, adjustment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM adjustments WHERE adjustment_id=%s", (adjustment_id,))
            return cur.rowcount > 0
