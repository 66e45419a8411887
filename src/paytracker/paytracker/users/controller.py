from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.web import admin_required, current_user, flash_unexpected
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import SessionUser

HOME_ENDPOINTS = {
    Role.OWNER: "owner_dashboard",
    Role.ADMIN: "dashboard",
    Role.MANAGER: "department_attendance",
    Role.EMPLOYEE: "me",
}


def register(app: Flask, container: Container) -> None:
    def _start_session(user: SessionUser, *, remember: bool = False) -> None:
        session.clear()
        session.update(user.to_session())
        session.permanent = remember

    def _home():
        return redirect(url_for(HOME_ENDPOINTS[current_user().role]))

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "role" in session:
            return _home()

        if request.method == "POST":
            try:
                user = container.auth_service.login_admin(
                    request.form.get("identifier", ""),
                    request.form.get("name", ""),
                    request.form.get("password", ""),
                )
                _start_session(user, remember=bool(request.form.get("remember_me")))
                flash("Connexion réussie !", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_unexpected("la connexion", e)

        return render_template("login.html", mode="admin")

    @app.route("/manager-login", methods=["GET", "POST"], endpoint="manager_login")
    def manager_login():
        if request.method == "POST":
            try:
                user = container.auth_service.login_manager(
                    request.form.get("identifier", ""),
                    request.form.get("pin", ""),
                )
                _start_session(user)
                flash(f"Bienvenue, {user.name} !", "success")
                return redirect(url_for("department_attendance"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_unexpected("la connexion", e)

        return render_template("login.html", mode="manager")

    @app.route("/employee-login", methods=["GET", "POST"], endpoint="employee_login")
    def employee_login():
        if request.method == "POST":
            try:
                user = container.auth_service.login_employee(
                    request.form.get("identifier", ""),
                    request.form.get("phone", ""),
                )
                _start_session(user)
                return redirect(url_for("me"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_unexpected("la connexion", e)

        return render_template("login.html", mode="employee")

    @app.route("/owner-login", methods=["GET", "POST"], endpoint="owner_login")
    def owner_login():
        if request.method == "POST":
            try:
                user = container.auth_service.login_owner(request.form.get("password", ""))
                _start_session(user)
                return redirect(url_for("owner_dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")

        return render_template("login.html", mode="owner")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Vous êtes déconnecté.", "info")
        return redirect(url_for("login"))

    @app.route("/settings/admins", methods=["POST"], endpoint="add_admin")
    @admin_required
    def add_admin():
        try:
            container.admin_service.add_admin(
                current_user(),
                name=request.form.get("name", ""),
                password=request.form.get("password", ""),
            )
            flash("Administrateur ajouté.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("l'ajout de l'administrateur", e)
        return redirect(url_for("company_settings"))

    @app.route("/settings/admins/<int:admin_id>/delete", methods=["POST"], endpoint="delete_admin")
    @admin_required
    def delete_admin(admin_id: int):
        try:
            container.admin_service.delete_admin(current_user(), admin_id)
            flash("Administrateur supprimé.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression de l'administrateur", e)
        return redirect(url_for("company_settings"))

    @app.route("/settings/password", methods=["POST"], endpoint="change_password")
    @admin_required
    def change_password():
        try:
            container.admin_service.change_password(
                current_user(),
                current_password=request.form.get("current_password", ""),
                new_password=request.form.get("new_password", ""),
            )
            flash("Mot de passe mis à jour.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("le changement de mot de passe", e)
        return redirect(url_for("company_settings"))
