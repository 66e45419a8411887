from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from ..common.datetime_utils import now_local
from ..common.permissions import require_company_role
from ..common.validators import require_non_empty
from ..core.constants import ONLINE_WINDOW_SECONDS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from ..users.model import SessionUser
from ..users.repository import AdminRepository
from .model import ChatContact, ChatMessage, Presence
from .repository import ChatRepository

CHAT_ROLES = (Role.ADMIN, Role.MANAGER)


def conversation_id(a: str, b: str) -> str:
    """Same id whichever participant sends first."""
    return "_".join(sorted([a, b]))


class ChatService:
    """Direct messages between admins and department managers of one company."""

    def __init__(
        self,
        chat: ChatRepository,
        admins: AdminRepository,
        departments: DepartmentRepository,
        employees: EmployeeRepository,
    ):
        self._chat = chat
        self._admins = admins
        self._departments = departments
        self._employees = employees

    def _directory(self, company_id: int) -> Dict[str, ChatContact]:
        out: Dict[str, ChatContact] = {}
        for a in self._admins.list_for_company(company_id):
            pid = f"{Role.ADMIN.value}-{a.admin_id}"
            out[pid] = ChatContact(principal_id=pid, name=a.name, role=Role.ADMIN.value)
        for d in self._departments.list_for_company(company_id):
            if not d.manager_id:
                continue
            manager = self._employees.get_by_id(d.manager_id)
            if manager:
                pid = f"{Role.MANAGER.value}-{manager.employee_id}"
                out[pid] = ChatContact(principal_id=pid, name=f"{manager.full_name} ({d.name})", role=Role.MANAGER.value)
        return out

    def contacts(self, actor: SessionUser, *, now: Optional[datetime] = None) -> List[ChatContact]:
        company_id = require_company_role(actor, *CHAT_ROLES)
        online = {p.principal_id for p in self.online_users(actor, now=now)}
        unread = self._chat.unread_counts(company_id, actor.principal_id)
        contacts = [
            ChatContact(
                principal_id=c.principal_id,
                name=c.name,
                role=c.role,
                online=c.principal_id in online,
                unread=unread.get(c.principal_id, 0),
            )
            for c in self._directory(company_id).values()
            if c.principal_id != actor.principal_id
        ]
        contacts.sort(key=lambda c: (-c.unread, not c.online, c.name.casefold()))
        return contacts

    def send(self, actor: SessionUser, receiver_id: str, text: str, *, now: Optional[datetime] = None) -> int:
        company_id = require_company_role(actor, *CHAT_ROLES)
        body = require_non_empty(text, "Message")
        receiver_id = (receiver_id or "").strip()
        if receiver_id == actor.principal_id or receiver_id not in self._directory(company_id):
            raise ValidationError("Destinataire invalide")

        return self._chat.add_message(
            company_id=company_id,
            conversation_id=conversation_id(actor.principal_id, receiver_id),
            sender_id=actor.principal_id,
            sender_name=actor.name,
            receiver_id=receiver_id,
            body=body,
            created_at=now or now_local(),
        )

    def conversations(self, actor: SessionUser) -> Dict[str, List[ChatMessage]]:
        """Messages of the actor grouped by conversation, oldest first."""
        company_id = require_company_role(actor, *CHAT_ROLES)
        grouped: Dict[str, List[ChatMessage]] = OrderedDict()
        for m in sorted(self._chat.list_for_participant(company_id, actor.principal_id), key=lambda m: m.created_at):
            grouped.setdefault(m.conversation_id, []).append(m)
        return grouped

    def mark_read(self, actor: SessionUser, conversation: str) -> int:
        company_id = require_company_role(actor, *CHAT_ROLES)
        if actor.principal_id not in (conversation or "").split("_"):
            raise ValidationError("Conversation invalide")
        return self._chat.mark_read(company_id, conversation, actor.principal_id)

    def heartbeat(self, actor: SessionUser, *, now: Optional[datetime] = None) -> None:
        company_id = require_company_role(actor, *CHAT_ROLES)
        self._chat.touch_presence(company_id, actor.principal_id, actor.name, now or now_local())

    def online_users(self, actor: SessionUser, *, now: Optional[datetime] = None) -> List[Presence]:
        company_id = require_company_role(actor, *CHAT_ROLES)
        since = (now or now_local()) - timedelta(seconds=ONLINE_WINDOW_SECONDS)
        return [p for p in self._chat.list_presence_since(company_id, since) if p.principal_id != actor.principal_id]
