from __future__ import annotations

from flask import Flask, flash, redirect, request, url_for

from ..common.web import admin_required, current_user, flash_unexpected, redirect_back
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<int:employee_id>/adjustments", methods=["POST"], endpoint="add_adjustment")
    @admin_required
    def add_adjustment(employee_id: int):
        try:
            container.adjustment_service.add(
                current_user(),
                employee_id,
                adjustment_type=request.form.get("adjustment_type", ""),
                amount=request.form.get("amount", ""),
                reason=request.form.get("reason", ""),
            )
            flash("Ajustement enregistré pour la période en cours.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'ajout de l'ajustement", e)
        return redirect(url_for("employee_detail", employee_id=employee_id))

    @app.route("/adjustments/<int:adjustment_id>/delete", methods=["POST"], endpoint="delete_adjustment")
    @admin_required
    def delete_adjustment(adjustment_id: int):
        try:
            container.adjustment_service.delete(current_user(), adjustment_id)
            flash("Ajustement supprimé.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression de l'ajustement", e)
        return redirect_back("recap")
