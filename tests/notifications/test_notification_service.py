from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.paytracker.paytracker.core.enums import NotificationType
from src.paytracker.paytracker.core.exceptions import NotFoundError

NOW = datetime(2024, 7, 24, 10, 0)


def test_newest_first_and_unread_count(services, company):
    first = services.notifications.notify(company.company_id, "Un", "premier", now=NOW)
    second = services.notifications.notify(
        company.company_id,
        "Deux",
        "second",
        link="/loans",
        notification_type=NotificationType.WARNING,
        now=NOW + timedelta(minutes=1),
    )

    assert [n.notification_id for n in services.notifications.list(company.company_id)] == [second, first]
    assert services.notifications.unread_count(company.company_id) == 2

    services.notifications.mark_read(company.company_id, first)
    assert services.notifications.unread_count(company.company_id) == 1

    assert services.notifications.mark_all_read(company.company_id) == 1
    assert services.notifications.unread_count(company.company_id) == 0


def test_mark_read_of_another_company(services, company):
    notification_id = services.notifications.notify(company.company_id, "Un", "premier", now=NOW)

    with pytest.raises(NotFoundError):
        services.notifications.mark_read(company.company_id + 1, notification_id)
