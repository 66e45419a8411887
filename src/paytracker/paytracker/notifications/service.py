from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Company-level notifications shown to administrators."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(
        self,
        company_id: int,
        title: str,
        description: str,
        *,
        link: Optional[str] = None,
        notification_type: NotificationType = NotificationType.INFO,
        now: Optional[datetime] = None,
    ) -> int:
        notification_id = self._notifications.add(
            company_id=int(company_id),
            title=title,
            description=description,
            link=link,
            notification_type=notification_type,
            created_at=now or now_local(),
        )
        logger.debug("Notification %s for company %s: %s", notification_id, company_id, title)
        return notification_id

    def list(self, company_id: int, *, limit: int = 50) -> Sequence[Notification]:
        return self._notifications.list_for_company(int(company_id), limit=limit)

    def unread_count(self, company_id: int) -> int:
        return self._notifications.count_unread(int(company_id))

    def mark_read(self, company_id: int, notification_id: int) -> None:
        if not self._notifications.mark_read(int(company_id), int(notification_id)):
            raise NotFoundError("Notification introuvable")

    def mark_all_read(self, company_id: int) -> int:
        return self._notifications.mark_all_read(int(company_id))
