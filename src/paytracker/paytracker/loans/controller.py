from __future__ import annotations

from flask import Flask, flash, render_template, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_user, flash_unexpected, form_int, redirect_back
from ..container import Container
from ..core.enums import LoanStatus
from ..core.exceptions import AuthorizationError, ValidationError
from .service import STATUS_LABELS


def register(app: Flask, container: Container) -> None:
    @app.route("/loans", methods=["GET"], endpoint="loans")
    @admin_required
    def loans():
        user = current_user()
        raw_status = request.args.get("status") or ""
        status = LoanStatus(raw_status) if raw_status in {s.value for s in LoanStatus} else None
        return render_template(
            "loans.html",
            loans=container.loan_service.list(user.company_id, status=status),
            employees=container.employee_service.list(user.company_id),
            status_labels=STATUS_LABELS,
            selected_status=status,
            active_page="loans",
        )

    @app.route("/loans/add", methods=["POST"], endpoint="add_loan")
    @admin_required
    def add_loan():
        try:
            raw_start = (request.form.get("start_date") or "").strip()
            container.loan_service.grant(
                current_user(),
                form_int("employee_id") or 0,
                amount=request.form.get("amount", ""),
                repayment_amount=request.form.get("repayment_amount", ""),
                start_date=parse_iso_date(raw_start) if raw_start else None,
            )
            flash("Avance accordée.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'octroi de l'avance", e)
        return redirect_back("loans")

    @app.route("/loans/<int:loan_id>/status", methods=["POST"], endpoint="update_loan_status")
    @admin_required
    def update_loan_status(loan_id: int):
        try:
            container.loan_service.set_status(current_user(), loan_id, request.form.get("status", ""))
            flash("Statut de l'avance mis à jour.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la mise à jour de l'avance", e)
        return redirect_back("loans")
