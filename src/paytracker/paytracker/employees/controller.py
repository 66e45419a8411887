from __future__ import annotations

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_user, flash_unexpected, form_int
from ..container import Container
from ..core.enums import AdjustmentType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _employee_form() -> dict:
        raw_birth = (request.form.get("birth_date") or "").strip()
        return {
            "first_name": request.form.get("first_name", ""),
            "last_name": request.form.get("last_name", ""),
            "position": request.form.get("position", ""),
            "department_id": form_int("department_id"),
            "phone": request.form.get("phone", ""),
            "daily_wage": request.form.get("daily_wage", ""),
            "birth_date": parse_iso_date(raw_birth) if raw_birth else None,
            "address": request.form.get("address", ""),
            "photo_url": request.form.get("photo_url", ""),
        }

    @app.route("/employees", methods=["GET"], endpoint="employees")
    @admin_required
    def employees():
        user = current_user()
        department_id = request.args.get("department_id", type=int)
        return render_template(
            "employees.html",
            employees=container.employee_service.list(user.company_id, department_id=department_id),
            departments=container.department_service.list(user.company_id),
            selected_department=department_id,
            active_page="employees",
        )

    @app.route("/employees/add", methods=["POST"], endpoint="add_employee")
    @admin_required
    def add_employee():
        try:
            employee_id = container.employee_service.add(current_user(), **_employee_form())
            flash("Employé ajouté avec succès.", "success")
            return redirect(url_for("employee_detail", employee_id=employee_id))
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'ajout de l'employé", e)
        return redirect(url_for("employees"))

    @app.route("/employees/<int:employee_id>", methods=["GET"], endpoint="employee_detail")
    @admin_required
    def employee_detail(employee_id: int):
        user = current_user()
        try:
            employee = container.employee_service.get(user.company_id, employee_id)
        except NotFoundError:
            abort(404)

        loans = [v for v in container.loan_service.list(user.company_id) if v.loan.employee_id == employee.employee_id]
        return render_template(
            "employee_detail.html",
            employee=employee,
            departments=container.department_service.list(user.company_id),
            attendance=container.attendance_service.employee_days(user.company_id, employee.employee_id),
            adjustments=container.adjustment_service.list_for_employee(user.company_id, employee.employee_id),
            loans=loans,
            pay_stubs=container.payroll_service.pay_stubs(user.company_id, employee.employee_id),
            adjustment_types=list(AdjustmentType),
            active_page="employees",
        )

    @app.route("/employees/<int:employee_id>/edit", methods=["POST"], endpoint="edit_employee")
    @admin_required
    def edit_employee(employee_id: int):
        try:
            container.employee_service.update(current_user(), employee_id, **_employee_form())
            flash("Employé mis à jour. Un nouveau salaire s'applique à la prochaine période.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la mise à jour de l'employé", e)
        return redirect(url_for("employee_detail", employee_id=employee_id))

    @app.route("/employees/<int:employee_id>/transfer", methods=["POST"], endpoint="transfer_employee")
    @admin_required
    def transfer_employee(employee_id: int):
        try:
            container.employee_service.transfer(current_user(), employee_id, form_int("department_id"))
            flash("Employé transféré.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("le transfert de l'employé", e)
        return redirect(url_for("employee_detail", employee_id=employee_id))

    @app.route("/employees/<int:employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    @admin_required
    def delete_employee(employee_id: int):
        try:
            container.employee_service.delete(current_user(), employee_id)
            flash("Employé supprimé.", "success")
            return redirect(url_for("employees"))
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression de l'employé", e)
        return redirect(url_for("employee_detail", employee_id=employee_id))
