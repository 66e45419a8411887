from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.paytracker.paytracker.core.enums import AdjustmentType, AuditAction
from src.paytracker.paytracker.core.exceptions import AuthorizationError, NotFoundError, ValidationError

NOW = datetime(2024, 7, 24, 10, 0)


def test_add_bonus_and_deduction(services, repos, admin, staff):
    services.adjustments.add(admin, staff.moussa, adjustment_type="bonus", amount="1 500", reason="Prime", now=NOW)
    services.adjustments.add(admin, staff.moussa, adjustment_type="deduction", amount="500,5", reason="Retard", now=NOW)

    items = services.adjustments.list_for_employee(admin.company_id, staff.moussa)
    assert [(a.adjustment_type, a.amount) for a in items] == [
        (AdjustmentType.BONUS, Decimal("1500.00")),
        (AdjustmentType.DEDUCTION, Decimal("500.50")),
    ]
    assert repos.audit.entries[-1].action == AuditAction.ADJUSTMENT_ADD
    assert repos.audit.entries[-1].details.startswith("Retenue")


@pytest.mark.parametrize(
    "kind, amount, reason",
    [("gift", "100", "x"), ("bonus", "0", "x"), ("bonus", "abc", "x"), ("bonus", "100", " ")],
)
def test_add_validates(services, admin, staff, kind, amount, reason):
    with pytest.raises(ValidationError):
        services.adjustments.add(admin, staff.moussa, adjustment_type=kind, amount=amount, reason=reason, now=NOW)


def test_delete(services, repos, admin, staff):
    adjustment_id = services.adjustments.add(
        admin, staff.fatou, adjustment_type="bonus", amount="1000", reason="Prime", now=NOW
    )

    services.adjustments.delete(admin, adjustment_id)

    assert services.adjustments.list_for_employee(admin.company_id, staff.fatou) == []
    assert repos.audit.entries[-1].action == AuditAction.ADJUSTMENT_DELETE
    with pytest.raises(NotFoundError):
        services.adjustments.delete(admin, adjustment_id)


def test_managers_cannot_adjust_pay(services, manager, staff):
    with pytest.raises(AuthorizationError):
        services.adjustments.add(manager, staff.moussa, adjustment_type="bonus", amount="100", reason="x", now=NOW)
