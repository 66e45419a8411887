from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChatMessage:
    message_id: int
    company_id: int
    conversation_id: str
    sender_id: str
    sender_name: str
    receiver_id: str
    body: str
    is_read: bool
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.message_id,
            "conversation_id": self.conversation_id,
            "sender_id": self.sender_id,
            "sender_name": self.sender_name,
            "receiver_id": self.receiver_id,
            "text": self.body,
            "read": self.is_read,
            "timestamp": self.created_at.strftime("%Y-%m-%d %H:%M"),
        }


@dataclass(frozen=True)
class Presence:
    principal_id: str
    display_name: str
    last_seen: datetime


@dataclass(frozen=True)
class ChatContact:
    principal_id: str
    name: str
    role: str
    online: bool = False
    unread: int = 0
