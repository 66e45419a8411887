from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def add(
        self,
        *,
        company_id: int,
        title: str,
        description: str,
        link: Optional[str],
        notification_type: NotificationType,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def list_for_company(self, company_id: int, *, limit: int) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, company_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, company_id: int, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, company_id: int) -> int:
        raise NotImplementedError
