from __future__ import annotations

from dataclasses import dataclass

from .adjustments.mysql_adjustment_repository import MySQLAdjustmentRepository
from .adjustments.service import AdjustmentService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.service import AuditService
from .chat.mysql_chat_repository import MySQLChatRepository
from .chat.service import ChatService
from .companies.mysql_company_repository import MySQLCompanyRepository, MySQLSiteSettingsRepository
from .companies.owner_service import OwnerService
from .companies.service import CompanyService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .justifications.mysql_justification_repository import MySQLJustificationRepository
from .justifications.service import JustificationService
from .loans.mysql_loan_repository import MySQLLoanRepository
from .loans.service import LoanService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .users.mysql_admin_repository import MySQLAdminRepository
from .users.service import AdminService, AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    companies_repo: MySQLCompanyRepository
    site_settings_repo: MySQLSiteSettingsRepository
    admins_repo: MySQLAdminRepository
    employees_repo: MySQLEmployeeRepository
    departments_repo: MySQLDepartmentRepository
    attendance_repo: MySQLAttendanceRepository
    adjustments_repo: MySQLAdjustmentRepository
    loans_repo: MySQLLoanRepository
    payroll_repo: MySQLPayrollRepository
    justifications_repo: MySQLJustificationRepository
    notifications_repo: MySQLNotificationRepository
    audit_repo: MySQLAuditRepository
    chat_repo: MySQLChatRepository

    audit_service: AuditService
    notification_service: NotificationService
    company_service: CompanyService
    owner_service: OwnerService
    auth_service: AuthService
    admin_service: AdminService
    department_service: DepartmentService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    adjustment_service: AdjustmentService
    loan_service: LoanService
    payroll_service: PayrollService
    justification_service: JustificationService
    chat_service: ChatService


def build_container(*, db_config: dict, owner_password: str = "") -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    companies_repo = MySQLCompanyRepository(conn)
    site_settings_repo = MySQLSiteSettingsRepository(conn)
    admins_repo = MySQLAdminRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    adjustments_repo = MySQLAdjustmentRepository(conn)
    loans_repo = MySQLLoanRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    justifications_repo = MySQLJustificationRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    audit_repo = MySQLAuditRepository(conn)
    chat_repo = MySQLChatRepository(conn)

    audit_service = AuditService(audit_repo)
    notification_service = NotificationService(notifications_repo)
    company_service = CompanyService(companies_repo)
    owner_service = OwnerService(companies_repo, admins_repo, site_settings_repo)
    auth_service = AuthService(
        company_service,
        admins_repo,
        employees_repo,
        departments_repo,
        audit_service,
        owner_password=owner_password,
    )
    admin_service = AdminService(admins_repo, audit_service)
    department_service = DepartmentService(departments_repo, employees_repo, audit_service)
    employee_service = EmployeeService(
        employees_repo, departments_repo, loans_repo, notification_service, audit_service
    )
    attendance_service = AttendanceService(attendance_repo, employees_repo, company_service, audit_service)
    adjustment_service = AdjustmentService(adjustments_repo, employees_repo, audit_service)
    loan_service = LoanService(loans_repo, employees_repo, company_service, audit_service)
    payroll_service = PayrollService(
        payroll_repo,
        companies=company_service,
        employees=employees_repo,
        departments=departments_repo,
        attendance=attendance_repo,
        adjustments=adjustments_repo,
        loans=loans_repo,
        notifications=notification_service,
        audit=audit_service,
    )
    justification_service = JustificationService(
        justifications_repo,
        employees_repo,
        attendance_repo,
        company_service,
        notification_service,
        audit_service,
    )
    chat_service = ChatService(chat_repo, admins_repo, departments_repo, employees_repo)

    return Container(
        conn=conn,
        companies_repo=companies_repo,
        site_settings_repo=site_settings_repo,
        admins_repo=admins_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        attendance_repo=attendance_repo,
        adjustments_repo=adjustments_repo,
        loans_repo=loans_repo,
        payroll_repo=payroll_repo,
        justifications_repo=justifications_repo,
        notifications_repo=notifications_repo,
        audit_repo=audit_repo,
        chat_repo=chat_repo,
        audit_service=audit_service,
        notification_service=notification_service,
        company_service=company_service,
        owner_service=owner_service,
        auth_service=auth_service,
        admin_service=admin_service,
        department_service=department_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        adjustment_service=adjustment_service,
        loan_service=loan_service,
        payroll_service=payroll_service,
        justification_service=justification_service,
        chat_service=chat_service,
    )
