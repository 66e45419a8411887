from __future__ import annotations

from flask import Flask, flash, jsonify, render_template

from ..common.web import admin_required, current_user, flash_unexpected, json_unexpected, redirect_back
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/notifications", methods=["GET"], endpoint="notifications")
    @admin_required
    def notifications():
        return render_template(
            "notifications.html",
            notifications=container.notification_service.list(current_user().company_id),
            active_page="notifications",
        )

    @app.route("/notifications/<int:notification_id>/read", methods=["POST"], endpoint="read_notification")
    @admin_required
    def read_notification(notification_id: int):
        try:
            container.notification_service.mark_read(current_user().company_id, notification_id)
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_unexpected("la lecture de la notification", e)
        return redirect_back("notifications")

    @app.route("/notifications/read-all", methods=["POST"], endpoint="read_all_notifications")
    @admin_required
    def read_all_notifications():
        try:
            count = container.notification_service.mark_all_read(current_user().company_id)
            flash(f"{count} notification(s) marquée(s) comme lue(s).", "success")
        except Exception as e:
            flash_unexpected("la lecture des notifications", e)
        return redirect_back("notifications")

    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @admin_required
    def api_notifications():
        company_id = current_user().company_id
        try:
            items = container.notification_service.list(company_id, limit=10)
            return jsonify(
                {
                    "success": True,
                    "unread": container.notification_service.unread_count(company_id),
                    "notifications": [
                        {
                            "id": n.notification_id,
                            "title": n.title,
                            "description": n.description,
                            "link": n.link,
                            "type": n.notification_type.value,
                            "read": n.is_read,
                            "timestamp": n.created_at.strftime("%Y-%m-%d %H:%M"),
                        }
                        for n in items
                    ],
                }
            )
        except Exception:
            return json_unexpected("loading notifications")
