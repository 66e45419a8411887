from __future__ import annotations

from flask import Flask, render_template

from ..common.web import admin_required, current_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/audit", methods=["GET"], endpoint="audit_log")
    @admin_required
    def audit_log():
        return render_template(
            "audit.html",
            entries=container.audit_service.list_audit(current_user().company_id),
            active_page="audit",
        )

    @app.route("/logs", methods=["GET"], endpoint="login_logs")
    @admin_required
    def login_logs():
        return render_template(
            "logs.html",
            logins=container.audit_service.list_logins(current_user().company_id),
            active_page="logs",
        )
