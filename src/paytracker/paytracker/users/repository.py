from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AdminRole
from .model import Admin


class AdminRepository(Protocol):
    """Repository interface for company administrators.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def get_by_name(self, company_id: int, name: str) -> Optional[Admin]:
        raise NotImplementedError

    def list_for_company(self, company_id: int) -> Sequence[Admin]:
        raise NotImplementedError

    def create(self, *, company_id: int, name: str, password_hash: str, role: AdminRole) -> int:
        raise NotImplementedError

    def update_password(self, admin_id: int, password_hash: str) -> None:
        raise NotImplementedError

    def delete(self, admin_id: int) -> bool:
        raise NotImplementedError
