from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import (
    admin_required,
    current_user,
    flash_unexpected,
    json_error,
    json_unexpected,
    redirect_back,
    roles_required,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..payroll.period import day_label


def _sheet_json(sheet) -> dict:
    return {
        "period": sheet.window.label,
        "dates": [d.isoformat() for d in sheet.dates],
        "rows": [
            {
                "employee_id": row.employee.employee_id,
                "name": row.employee.full_name,
                "days": {d.isoformat(): present for d, present in row.days.items()},
                "days_present": row.days_present,
            }
            for row in sheet.rows
        ],
    }


def register(app: Flask, container: Container) -> None:
    @app.template_filter("day_label")
    def _day_label(value):
        return day_label(value)

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @admin_required
    def dashboard():
        user = current_user()
        department_id = request.args.get("department_id", type=int)
        return render_template(
            "dashboard.html",
            sheet=container.attendance_service.sheet(user.company_id, department_id=department_id),
            departments=container.department_service.list(user.company_id),
            selected_department=department_id,
            active_page="dashboard",
        )

    @app.route("/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def mark_attendance():
        wants_json = request.is_json
        if wants_json:
            data = request.get_json(silent=True) or {}
        else:
            data = request.form
        try:
            try:
                employee_id = int(data.get("employee_id") or 0)
            except (TypeError, ValueError):
                raise ValidationError("Employé invalide")
            present = str(data.get("present", "")).lower() in ("1", "true", "on", "yes")
            container.attendance_service.mark(
                current_user(),
                employee_id,
                parse_iso_date(str(data.get("work_date") or "")),
                present,
            )
            if wants_json:
                return jsonify({"success": True, "present": present})
        except (ValidationError, AuthorizationError) as e:
            if wants_json:
                return json_error(str(e))
            flash(str(e), "danger")
        except Exception as e:
            if wants_json:
                return json_unexpected("marking attendance")
            flash_unexpected("l'enregistrement de la présence", e)

        default = "department_attendance" if current_user().role == Role.MANAGER else "dashboard"
        return redirect_back(default)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @roles_required(Role.ADMIN, Role.MANAGER)
    def api_attendance():
        user = current_user()
        if user.role == Role.MANAGER:
            department_id = user.department_id
        else:
            department_id = request.args.get("department_id", type=int)
        try:
            sheet = container.attendance_service.sheet(user.company_id, department_id=department_id)
            return jsonify({"success": True, **_sheet_json(sheet)})
        except Exception:
            return json_unexpected("loading attendance")

    @app.route("/department", methods=["GET"], endpoint="department_attendance")
    @roles_required(Role.MANAGER)
    def department_attendance():
        user = current_user()
        return render_template(
            "department_attendance.html",
            sheet=container.attendance_service.sheet(user.company_id, department_id=user.department_id),
            justifications=container.justification_service.list_pending(user),
            active_page="department",
        )

    @app.route("/me", methods=["GET"], endpoint="me")
    @roles_required(Role.EMPLOYEE)
    def me():
        user = current_user()
        return render_template(
            "me.html",
            attendance=container.attendance_service.employee_days(user.company_id, user.user_id),
            pay_stubs=container.payroll_service.pay_stubs(user.company_id, user.user_id),
            justifications=container.justification_service.list_mine(user),
            active_page="me",
        )
