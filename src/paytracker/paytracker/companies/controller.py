from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import admin_required, current_user, flash_unexpected, form_int, owner_required
from ..container import Container
from ..core.enums import PayPeriod
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/register", methods=["GET", "POST"], endpoint="register_company")
    def register_company():
        if request.method == "POST":
            try:
                container.company_service.register_company(
                    code=request.form.get("code", ""),
                    identifier=request.form.get("identifier", ""),
                    company_name=request.form.get("company_name", ""),
                    admin_name=request.form.get("admin_name", ""),
                    admin_email=request.form.get("admin_email", ""),
                    admin_phone=request.form.get("admin_phone", ""),
                    password=request.form.get("password", ""),
                    pay_period=request.form.get("pay_period", PayPeriod.WEEKLY.value),
                    currency=request.form.get("currency") or app.config.get("DEFAULT_CURRENCY"),
                )
                flash("Entreprise inscrite ! Connectez-vous avec votre identifiant.", "success")
                return redirect(url_for("login"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_unexpected("l'inscription", e)

        return render_template("register.html", pay_periods=list(PayPeriod), form=request.form)

    @app.route("/settings", methods=["GET", "POST"], endpoint="company_settings")
    @admin_required
    def company_settings():
        user = current_user()
        if request.method == "POST":
            try:
                company = container.company_service.update_profile(
                    user,
                    name=request.form.get("name", ""),
                    description=request.form.get("description", ""),
                    logo_url=request.form.get("logo_url", ""),
                    pay_period=request.form.get("pay_period"),
                    currency=request.form.get("currency"),
                )
                session["company_name"] = company.name
                session["currency"] = company.currency
                flash("Profil de l'entreprise mis à jour.", "success")
                return redirect(url_for("company_settings"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_unexpected("la mise à jour du profil", e)

        company = container.company_service.get(user.company_id)
        return render_template(
            "settings.html",
            company=company,
            period=container.company_service.current_period(company),
            admins=container.admin_service.list_admins(user),
            pay_periods=list(PayPeriod),
            active_page="settings",
        )

    @app.route("/owner", endpoint="owner_dashboard")
    @owner_required
    def owner_dashboard():
        return render_template(
            "owner_dashboard.html",
            companies=container.owner_service.list_companies(),
            codes=container.owner_service.list_registration_codes(),
            site_settings=container.owner_service.get_site_settings(),
        )

    @app.route("/owner/codes", methods=["POST"], endpoint="owner_generate_code")
    @owner_required
    def owner_generate_code():
        try:
            code = container.owner_service.generate_registration_code(trial_days=form_int("trial_days"))
            flash(f"Nouveau code d'inscription : {code.code}", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la génération du code", e)
        return redirect(url_for("owner_dashboard"))

    @app.route("/owner/companies/<int:company_id>/identity", methods=["POST"], endpoint="owner_update_company")
    @owner_required
    def owner_update_company(company_id: int):
        try:
            container.owner_service.update_company_identity(
                company_id,
                name=request.form.get("name", ""),
                identifier=request.form.get("identifier", ""),
            )
            flash("Entreprise mise à jour.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la mise à jour de l'entreprise", e)
        return redirect(url_for("owner_dashboard"))

    @app.route("/owner/companies/<int:company_id>/status", methods=["POST"], endpoint="owner_toggle_company")
    @owner_required
    def owner_toggle_company(company_id: int):
        try:
            status = container.owner_service.toggle_suspension(company_id)
            flash(f"Statut de l'entreprise : {status.value}", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("le changement de statut", e)
        return redirect(url_for("owner_dashboard"))

    @app.route("/owner/companies/<int:company_id>/delete", methods=["POST"], endpoint="owner_delete_company")
    @owner_required
    def owner_delete_company(company_id: int):
        try:
            container.owner_service.delete_company(company_id)
            flash("Entreprise et toutes ses données supprimées.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression de l'entreprise", e)
        return redirect(url_for("owner_dashboard"))

    @app.route(
        "/owner/companies/<int:company_id>/admins/<int:admin_id>/password",
        methods=["POST"],
        endpoint="owner_reset_password",
    )
    @owner_required
    def owner_reset_password(company_id: int, admin_id: int):
        try:
            container.owner_service.reset_admin_password(company_id, admin_id, request.form.get("password", ""))
            flash("Mot de passe réinitialisé.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la réinitialisation du mot de passe", e)
        return redirect(url_for("owner_dashboard"))

    @app.route("/owner/site-settings", methods=["POST"], endpoint="owner_site_settings")
    @owner_required
    def owner_site_settings():
        try:
            settings = container.owner_service.update_site_settings(
                is_under_maintenance=bool(request.form.get("is_under_maintenance")),
                maintenance_message=request.form.get("maintenance_message", ""),
            )
            state = "activé" if settings.is_under_maintenance else "désactivé"
            flash(f"Mode maintenance {state}.", "success")
        except Exception as e:
            flash_unexpected("la mise à jour des paramètres du site", e)
        return redirect(url_for("owner_dashboard"))
