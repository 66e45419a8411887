from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import SessionUser


def require_company_role(actor: SessionUser, *roles: Role) -> int:
    """Return the actor's company id, or raise if the actor's role is not allowed."""
    allowed = roles or (Role.ADMIN,)
    if actor is None or actor.role not in allowed or not actor.company_id:
        raise AuthorizationError("Vous n'avez pas les droits nécessaires")
    return int(actor.company_id)
