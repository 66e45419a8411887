from __future__ import annotations

from flask import Flask, flash, render_template, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_user, flash_unexpected, redirect_back, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/justifications", methods=["GET"], endpoint="justifications")
    @admin_required
    def justifications():
        return render_template(
            "justifications.html",
            justifications=container.justification_service.list_pending(current_user()),
            active_page="justifications",
        )

    @app.route("/justifications/submit", methods=["POST"], endpoint="submit_justification")
    @roles_required(Role.EMPLOYEE)
    def submit_justification():
        try:
            container.justification_service.submit(
                current_user(),
                work_date=parse_iso_date(request.form.get("work_date", "")),
                reason=request.form.get("reason", ""),
                document_url=request.form.get("document_url", ""),
            )
            flash("Justification envoyée. Elle sera examinée par votre responsable.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'envoi de la justification", e)
        return redirect_back("me")

    @app.route(
        "/justifications/<int:justification_id>/review",
        methods=["POST"],
        endpoint="review_justification",
    )
    @roles_required(Role.ADMIN, Role.MANAGER)
    def review_justification(justification_id: int):
        user = current_user()
        approve = request.form.get("decision") == "approve"
        try:
            container.justification_service.review(user, justification_id, approve=approve)
            if approve:
                flash("Justification approuvée : le jour est marqué présent.", "success")
            else:
                flash("Justification rejetée.", "info")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'examen de la justification", e)
        return redirect_back("department_attendance" if user.role == Role.MANAGER else "justifications")
