from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_CURRENCY
from ..core.enums import AdminRole, Role


@dataclass(frozen=True)
class Admin:
    """Domain entity: company administrator.

    Note: Plain data object (no DB access code).
    """

    admin_id: int
    company_id: int
    name: str
    password_hash: str
    role: AdminRole


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    role: Role
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    admin_role: Optional[AdminRole] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    currency: str = DEFAULT_CURRENCY

    @property
    def principal_id(self) -> str:
        """Identifier unique across admins and employees (used by chat)."""
        return f"{self.role.value}-{self.user_id}"

    @property
    def is_superadmin(self) -> bool:
        return self.admin_role == AdminRole.SUPERADMIN

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "company_id": self.company_id,
            "company_name": self.company_name,
            "admin_role": self.admin_role.value if self.admin_role else None,
            "department_id": self.department_id,
            "department_name": self.department_name,
            "currency": self.currency,
        }

    @classmethod
    def from_session(cls, data: Mapping[str, Any]) -> "SessionUser":
        admin_role = data.get("admin_role")
        return cls(
            user_id=int(data.get("user_id") or 0),
            name=data.get("name") or "",
            role=Role(data["role"]),
            company_id=data.get("company_id"),
            company_name=data.get("company_name"),
            admin_role=AdminRole(admin_role) if admin_role else None,
            department_id=data.get("department_id"),
            department_name=data.get("department_name"),
            currency=data.get("currency") or DEFAULT_CURRENCY,
        )
