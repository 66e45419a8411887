from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import current_app, flash, jsonify, redirect, render_template, request, session, url_for

from ..core.enums import Role
from ..users.model import SessionUser

logger = logging.getLogger(__name__)


def current_user() -> Optional[SessionUser]:
    if "role" not in session:
        return None
    return SessionUser.from_session(session)


def render_forbidden():
    user = current_user()
    current = {"name": user.name if user else None, "role": user.role.value if user else None}
    return render_template("403.html", current_user=current), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "role" not in session:
            flash("Veuillez vous connecter pour continuer.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow only the given session roles; other logged-in users get a 403 page."""

    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "role" not in session:
                flash("Veuillez vous connecter pour continuer.", "warning")
                return redirect(url_for("login"))
            if session.get("role") not in allowed:
                return render_forbidden()
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = roles_required(Role.ADMIN)
owner_required = roles_required(Role.OWNER)


def flash_unexpected(action: str, exc: Optional[BaseException] = None) -> None:
    """Log the active exception and show a generic message (details only in DEBUG)."""
    logger.exception("Unexpected error while %s", action)
    if exc is not None and is_debug():
        flash(f"Erreur système lors de {action} : {exc}", "danger")
    else:
        flash(f"Erreur système lors de {action}", "danger")


def json_error(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def json_unexpected(action: str):
    logger.exception("Unexpected error while %s", action)
    return json_error("Erreur système", 500)


def form_int(name: str) -> Optional[int]:
    """Optional integer form field ('' or missing -> None)."""
    raw = (request.form.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def redirect_back(default_endpoint: str, **values):
    """Redirect to a same-site ``next`` form/query value, else to ``default_endpoint``."""
    target = request.form.get("next") or request.args.get("next") or ""
    if target.startswith("/") and not target.startswith("//"):
        return redirect(target)
    return redirect(url_for(default_endpoint, **values))


def is_debug() -> bool:
    return bool(current_app.config.get("DEBUG", False))
