from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Protocol, Sequence

from ..core.enums import AdjustmentType
from .model import Adjustment


class AdjustmentRepository(Protocol):
    def get_by_id(self, adjustment_id: int) -> Optional[Adjustment]:
        raise NotImplementedError

    def list_for_employees(self, employee_ids: Sequence[int]) -> Dict[int, List[Adjustment]]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        adjustment_type: AdjustmentType,
        amount: Decimal,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def delete(self, adjustment_id: int) -> bool:
        raise NotImplementedError
