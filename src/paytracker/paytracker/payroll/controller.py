from __future__ import annotations

from flask import Flask, abort, flash, redirect, render_template, send_file, url_for

from ..common.web import admin_required, current_user, flash_unexpected
from ..container import Container
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _slug(label: str) -> str:
        return "".join(ch if ch.isalnum() else "_" for ch in label).strip("_").lower()

    @app.route("/recap", methods=["GET"], endpoint="recap")
    @admin_required
    def recap():
        user = current_user()
        return render_template(
            "recap.html",
            recap=container.payroll_service.build_recap(user.company_id),
            active_page="recap",
        )

    @app.route("/recap.csv", methods=["GET"], endpoint="recap_csv")
    @admin_required
    def recap_csv():
        user = current_user()
        filename = f"recapitulatif_paie_{user.company_id}.csv"
        return app.response_class(
            container.payroll_service.recap_csv(user.company_id),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/recap.xlsx", methods=["GET"], endpoint="recap_excel")
    @admin_required
    def recap_excel():
        user = current_user()
        return send_file(
            container.payroll_service.recap_excel(user.company_id),
            download_name=f"recapitulatif_paie_{user.company_id}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

    @app.route("/recap/close", methods=["POST"], endpoint="close_period")
    @admin_required
    def close_period():
        try:
            archive_id = container.payroll_service.close_period(current_user())
            flash("Période clôturée et archivée. Une nouvelle période commence.", "success")
            return redirect(url_for("archive_detail", archive_id=archive_id))
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la clôture de la période", e)
        return redirect(url_for("recap"))

    @app.route("/archives", methods=["GET"], endpoint="archives")
    @admin_required
    def archives():
        user = current_user()
        return render_template(
            "archives.html",
            archives=container.payroll_service.list_archives(user.company_id),
            active_page="archives",
        )

    @app.route("/archives/<int:archive_id>", methods=["GET"], endpoint="archive_detail")
    @admin_required
    def archive_detail(archive_id: int):
        user = current_user()
        try:
            archive = container.payroll_service.get_archive(user.company_id, archive_id)
        except NotFoundError:
            abort(404)
        return render_template(
            "archive_detail.html",
            archive=archive,
            stubs=container.payroll_service.archive_stubs(user.company_id, archive.archive_id),
            active_page="archives",
        )

    @app.route("/archives/<int:archive_id>.xlsx", methods=["GET"], endpoint="archive_excel")
    @admin_required
    def archive_excel(archive_id: int):
        user = current_user()
        try:
            archive = container.payroll_service.get_archive(user.company_id, archive_id)
            buf = container.payroll_service.archive_excel(user.company_id, archive.archive_id)
        except NotFoundError:
            abort(404)
        return send_file(
            buf,
            download_name=f"paie_{_slug(archive.period_label)}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

    @app.route("/archives/<int:archive_id>/delete", methods=["POST"], endpoint="delete_archive")
    @admin_required
    def delete_archive(archive_id: int):
        try:
            container.payroll_service.delete_archive(current_user(), archive_id)
            flash("Archive supprimée. Les fiches de paie sont conservées.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la suppression de l'archive", e)
        return redirect(url_for("archives"))
