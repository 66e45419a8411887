from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..core.enums import AdjustmentType


@dataclass(frozen=True)
class Adjustment:
    """Bonus or deduction applied to the open pay period."""

    adjustment_id: int
    employee_id: int
    adjustment_type: AdjustmentType
    amount: Decimal
    reason: str
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.adjustment_type == AdjustmentType.BONUS else -self.amount

    def to_dict(self) -> dict:
        """Snapshot kept on a pay stub."""
        return {
            "id": self.adjustment_id,
            "type": self.adjustment_type.value,
            "amount": str(self.amount),
            "reason": self.reason,
            "date": self.created_at.isoformat(),
        }
