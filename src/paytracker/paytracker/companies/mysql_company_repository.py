from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AdminRole, CompanyStatus, PayPeriod
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Company, RegistrationCode, SiteSettings
from .repository import CompanyRepository, SiteSettingsRepository

_COMPANY_COLUMNS = """
    company_id, identifier, name, super_admin_name, super_admin_email, super_admin_phone,
    pay_period, current_period_start, status, currency, logo_url, description, registered_at
"""

# Child tables first; one transaction removes the whole tenant.
_COMPANY_TABLES = (
    "chat_presence",
    "chat_messages",
    "login_logs",
    "audit_logs",
    "notifications",
    "justifications",
    "pay_stubs",
    "payroll_archives",
    "loans",
)


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _map(row: dict) -> Company:
        return Company(
            company_id=int(row["company_id"]),
            identifier=row["identifier"],
            name=row["name"],
            super_admin_name=row["super_admin_name"],
            super_admin_email=row.get("super_admin_email") or "",
            super_admin_phone=row.get("super_admin_phone") or "",
            pay_period=PayPeriod(row["pay_period"]),
            current_period_start=row["current_period_start"],
            status=CompanyStatus(row["status"]),
            currency=row.get("currency") or "XOF",
            logo_url=row.get("logo_url"),
            description=row.get("description"),
            registered_at=row.get("registered_at"),
        )

    @staticmethod
    def _map_code(row: dict) -> RegistrationCode:
        return RegistrationCode(
            code=row["code"],
            is_used=bool(row["is_used"]),
            created_at=row.get("created_at"),
            expires_at=row.get("expires_at"),
            used_by_company_id=row.get("used_by_company_id"),
        )

    def get_by_id(self, company_id: int) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COMPANY_COLUMNS} FROM companies WHERE company_id=%s", (company_id,))
            row = fetchone(cur)
            return self._map(row) if row else None

    def get_by_identifier(self, identifier: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COMPANY_COLUMNS} FROM companies WHERE UPPER(identifier)=UPPER(%s)",
                (identifier,),
            )
            row = fetchone(cur)
            return self._map(row) if row else None

    def list_all(self) -> Sequence[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COMPANY_COLUMNS} FROM companies ORDER BY registered_at DESC")
            return [self._map(r) for r in fetchall(cur)]

    def register(
        self,
        *,
        code: str,
        identifier: str,
        name: str,
        super_admin_name: str,
        super_admin_email: str,
        super_admin_phone: str,
        password_hash: str,
        pay_period: PayPeriod,
        currency: str,
        current_period_start: date,
        registered_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO companies(identifier, name, super_admin_name, super_admin_email, super_admin_phone,
                                      pay_period, current_period_start, status, currency, logo_url, description,
                                      registered_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,'','',%s)
                """,
                (
                    identifier,
                    name,
                    super_admin_name,
                    super_admin_email,
                    super_admin_phone,
                    pay_period.value,
                    current_period_start,
                    CompanyStatus.ACTIVE.value,
                    currency,
                    registered_at,
                ),
            )
            company_id = int(cur.lastrowid)

            cur.execute(
                "INSERT INTO admins(company_id, name, password_hash, role) VALUES(%s,%s,%s,%s)",
                (company_id, super_admin_name, password_hash, AdminRole.SUPERADMIN.value),
            )
            cur.execute(
                "UPDATE registration_codes SET is_used=1, used_by_company_id=%s WHERE code=%s AND is_used=0",
                (company_id, code),
            )
            if cur.rowcount != 1:
                # Consumed by a concurrent registration.
                raise ValidationError("Ce code d'inscription a déjà été utilisé.")
            return company_id

    def update_profile(
        self,
        company_id: int,
        *,
        name: str,
        description: Optional[str],
        logo_url: Optional[str],
        pay_period: PayPeriod,
        currency: str,
        current_period_start: date,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE companies
                SET name=%s, description=%s, logo_url=%s, pay_period=%s, currency=%s, current_period_start=%s
                WHERE company_id=%s
                """,
                (name, description, logo_url, pay_period.value, currency, current_period_start, company_id),
            )

    def update_identity(self, company_id: int, *, name: str, identifier: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE companies SET name=%s, identifier=%s WHERE company_id=%s",
                (name, identifier, company_id),
            )

    def set_status(self, company_id: int, status: CompanyStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE companies SET status=%s WHERE company_id=%s", (status.value, company_id))

    def delete_company(self, company_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            for table in _COMPANY_TABLES:
                cur.execute(f"DELETE FROM {table} WHERE company_id=%s", (company_id,))
            cur.execute(
                "DELETE a FROM adjustments a JOIN employees e ON e.employee_id=a.employee_id WHERE e.company_id=%s",
                (company_id,),
            )
            cur.execute(
                "DELETE t FROM attendance t JOIN employees e ON e.employee_id=t.employee_id WHERE e.company_id=%s",
                (company_id,),
            )
            cur.execute("UPDATE departments SET manager_id=NULL WHERE company_id=%s", (company_id,))
            cur.execute("DELETE FROM employees WHERE company_id=%s", (company_id,))
            cur.execute("DELETE FROM departments WHERE company_id=%s", (company_id,))
            cur.execute("DELETE FROM admins WHERE company_id=%s", (company_id,))
            cur.execute("UPDATE registration_codes SET used_by_company_id=NULL WHERE used_by_company_id=%s", (company_id,))
            cur.execute("DELETE FROM companies WHERE company_id=%s", (company_id,))
            return cur.rowcount > 0

    def get_registration_code(self, code: str) -> Optional[RegistrationCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT code, is_used, created_at, expires_at, used_by_company_id FROM registration_codes WHERE code=%s",
                (code,),
            )
            row = fetchone(cur)
            return self._map_code(row) if row else None

    def get_code_for_company(self, company_id: int) -> Optional[RegistrationCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, is_used, created_at, expires_at, used_by_company_id
                FROM registration_codes
                WHERE used_by_company_id=%s
                LIMIT 1
                """,
                (company_id,),
            )
            row = fetchone(cur)
            return self._map_code(row) if row else None

    def create_registration_code(self, *, code: str, created_at: datetime, expires_at: Optional[datetime]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO registration_codes(code, is_used, created_at, expires_at) VALUES(%s,0,%s,%s)",
                (code, created_at, expires_at),
            )

    def list_registration_codes(self, *, limit: int) -> Sequence[RegistrationCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code, is_used, created_at, expires_at, used_by_company_id
                FROM registration_codes
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [self._map_code(r) for r in fetchall(cur)]


class MySQLSiteSettingsRepository(SiteSettingsRepository):
    """Single-row table (settings_id = 1)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> SiteSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT is_under_maintenance, maintenance_message FROM site_settings WHERE settings_id=1")
            row = fetchone(cur)
            if not row:
                return SiteSettings()
            return SiteSettings(
                is_under_maintenance=bool(row["is_under_maintenance"]),
                maintenance_message=row.get("maintenance_message") or "",
            )

    def save(self, settings: SiteSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO site_settings(settings_id, is_under_maintenance, maintenance_message)
                VALUES(1,%s,%s)
                ON DUPLICATE KEY UPDATE is_under_maintenance=VALUES(is_under_maintenance),
                                        maintenance_message=VALUES(maintenance_message)
                """,
                (int(settings.is_under_maintenance), settings.maintenance_message),
            )
