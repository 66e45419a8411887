from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template, request

from config import get_settings_module

from .common.currency import format_currency
from .common.web import current_user
from .core.constants import DEFAULT_SESSION_DAYS
from .core.enums import Role
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_company, list_tables

from .container import Container, build_container
from .adjustments.controller import register as register_adjustments
from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .chat.controller import register as register_chat
from .companies.controller import register as register_companies
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .justifications.controller import register as register_justifications
from .loans.controller import register as register_loans
from .notifications.controller import register as register_notifications
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Reachable while the platform is in maintenance.
MAINTENANCE_OPEN_ENDPOINTS = {"static", "owner_login", "logout"}

logger = logging.getLogger(__name__)


def configure_logging(app: Flask, *, level: str = "INFO", log_file: str = "") -> None:
    package_logger = logging.getLogger("paytracker")
    package_logger.setLevel(level.upper())
    app.logger.setLevel(level.upper())

    if not logging.getLogger().handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(level.upper())
        app.logger.addHandler(handler)
        package_logger.addHandler(handler)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["DEFAULT_CURRENCY"] = getattr(settings, "DEFAULT_CURRENCY", "XOF")
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    configure_logging(
        app,
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        log_file=getattr(settings, "LOG_FILE", ""),
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        database_dir = Path(__file__).resolve().parents[3] / "database"
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=database_dir / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
            ensure_demo_company(db_config)
            logger.info("Demo company ready")

        container = build_container(
            db_config=db_config,
            owner_password=getattr(settings, "OWNER_PASSWORD", ""),
        )

    @app.before_request
    def maintenance_gate():
        if request.endpoint in MAINTENANCE_OPEN_ENDPOINTS:
            return None
        user = current_user()
        if user and user.role == Role.OWNER:
            return None
        site = container.owner_service.get_site_settings()
        if site.is_under_maintenance:
            return render_template("maintenance.html", message=site.maintenance_message), 503
        return None

    @app.context_processor
    def inject_user():
        user = current_user()
        unread = 0
        if user and user.role == Role.ADMIN and user.company_id:
            unread = container.notification_service.unread_count(user.company_id)
        return {"user": user, "unread_notifications": unread, "Role": Role}

    @app.template_filter("currency")
    def currency_filter(amount, code=None):
        user = current_user()
        return format_currency(amount, code or (user.currency if user else app.config["DEFAULT_CURRENCY"]))

    register_users(app, container)
    register_companies(app, container)
    register_employees(app, container)
    register_departments(app, container)
    register_attendance(app, container)
    register_adjustments(app, container)
    register_loans(app, container)
    register_payroll(app, container)
    register_justifications(app, container)
    register_notifications(app, container)
    register_audit(app, container)
    register_chat(app, container)

    return app
