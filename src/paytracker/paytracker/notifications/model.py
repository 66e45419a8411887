from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    company_id: int
    title: str
    description: str
    link: Optional[str]
    notification_type: NotificationType
    is_read: bool
    created_at: datetime
