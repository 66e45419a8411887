from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import admin_required, current_user, flash_unexpected, form_int
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/departments", methods=["GET"], endpoint="departments")
    @admin_required
    def departments():
        user = current_user()
        return render_template(
            "departments.html",
            departments=container.department_service.overview(user.company_id),
            employees=container.employee_service.list(user.company_id),
            active_page="departments",
        )

    @app.route("/departments/add", methods=["POST"], endpoint="add_department")
    @admin_required
    def add_department():
        try:
            container.department_service.add(
                current_user(),
                name=request.form.get("name", ""),
                manager_id=form_int("manager_id"),
            )
            flash("Département créé.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la création du département", e)
        return redirect(url_for("departments"))

    @app.route("/departments/<int:department_id>/edit", methods=["POST"], endpoint="edit_department")
    @admin_required
    def edit_department(department_id: int):
        try:
            container.department_service.update(
                current_user(),
                department_id,
                name=request.form.get("name", ""),
                manager_id=form_int("manager_id"),
            )
            flash("Département mis à jour.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la mise à jour du département", e)
        return redirect(url_for("departments"))

    @app.route("/departments/<int:department_id>/delete", methods=["POST"], endpoint="delete_department")
    @admin_required
    def delete_department(department_id: int):
        try:
            container.department_service.delete(current_user(), department_id)
            flash("Département supprimé.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression du département", e)
        return redirect(url_for("departments"))
