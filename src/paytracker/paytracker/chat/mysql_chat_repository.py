from __future__ import annotations

from datetime import datetime
from typing import Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ChatMessage, Presence
from .repository import ChatRepository


class MySQLChatRepository(ChatRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO chat_messages(company_id, conversation_id, sender_id, sender_name, receiver_id, body,
                                          is_read, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,0,%s)
                """,
                (company_id, conversation_id, sender_id, sender_name, receiver_id, body, created_at),
            )
            return int(cur.lastrowid)

    def list_for_participant(self, company_id: int, principal_id: str) -> Sequence[ChatMessage]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT message_id, company_id, conversation_id, sender_id, sender_name, receiver_id, body,
                       is_read, created_at
                FROM chat_messages
                WHERE company_id=%s AND (sender_id=%s OR receiver_id=%s)
                ORDER BY created_at, message_id
                """,
                (company_id, principal_id, principal_id),
            )
            return [
                ChatMessage(
                    message_id=int(r["message_id"]),
                    company_id=int(r["company_id"]),
                    conversation_id=r["conversation_id"],
                    sender_id=r["sender_id"],
                    sender_name=r["sender_name"],
                    receiver_id=r["receiver_id"],
                    body=r["body"],
                    is_read=bool(r["is_read"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def mark_read(self, company_id: int, conversation_id: str, receiver_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE chat_messages SET is_read=1
                WHERE company_id=%s AND conversation_id=%s AND receiver_id=%s AND is_read=0
                """,
                (company_id, conversation_id, receiver_id),
            )
            return int(cur.rowcount)

    def unread_counts(self, company_id: int, receiver_id: str) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sender_id, COUNT(*) AS n
                FROM chat_messages
                WHERE company_id=%s AND receiver_id=%s AND is_read=0
                GROUP BY sender_id
                """,
                (company_id, receiver_id),
            )
            return {r["sender_id"]: int(r["n"]) for r in fetchall(cur)}

    def touch_presence(self, company_id: int, principal_id: str, display_name: str, seen_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO chat_presence(company_id, principal_id, display_name, last_seen)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE display_name=VALUES(display_name), last_seen=VALUES(last_seen)
                """,
                (company_id, principal_id, display_name, seen_at),
            )

    def list_presence_since(self, company_id: int, since: datetime) -> Sequence[Presence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT principal_id, display_name, last_seen
                FROM chat_presence
                WHERE company_id=%s AND last_seen >= %s
                ORDER BY display_name
                """,
                (company_id, since),
            )
            return [
                Presence(principal_id=r["principal_id"], display_name=r["display_name"], last_seen=r["last_seen"])
                for r in fetchall(cur)
            ]
