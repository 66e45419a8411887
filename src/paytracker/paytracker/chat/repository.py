from __future__ import annotations

from datetime import datetime
from typing import Dict, Protocol, Sequence

from .model import ChatMessage, Presence


class ChatRepository(Protocol):
    def add_message(
        self,
        *,
        company_id: int,
        conversation_id: str,
        sender_id: str,
        sender_name: str,
        receiver_id: str,
        body: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def list_for_participant(self, company_id: int, principal_id: str) -> Sequence[ChatMessage]:
        raise NotImplementedError

    def mark_read(self, company_id: int, conversation_id: str, receiver_id: str) -> int:
        raise NotImplementedError

    def unread_counts(self, company_id: int, receiver_id: str) -> Dict[str, int]:
        raise NotImplementedError

    def touch_presence(self, company_id: int, principal_id: str, display_name: str, seen_at: datetime) -> None:
        raise NotImplementedError

    def list_presence_since(self, company_id: int, since: datetime) -> Sequence[Presence]:
        raise NotImplementedError
