from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used for authorization."""

    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class AdminRole(str, Enum):
    SUPERADMIN = "superadmin"
    ADJOINT = "adjoint"


class CompanyStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class PayPeriod(str, Enum):
    """Recurring interval after which pay is archived and attendance resets."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"


class AdjustmentType(str, Enum):
    BONUS = "bonus"
    DEDUCTION = "deduction"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    REPAID = "repaid"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class RequestStatus(str, Enum):
    """Review state of an absence justification."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


class AuditAction(str, Enum):
    EMPLOYEE_ADD = "employee_add"
    EMPLOYEE_UPDATE = "employee_update"
    EMPLOYEE_DELETE = "employee_delete"
    DEPARTMENT_ADD = "department_add"
    DEPARTMENT_UPDATE = "department_update"
    DEPARTMENT_DELETE = "department_delete"
    PAYROLL_ARCHIVE = "payroll_archive"
    LOAN_ADD = "loan_add"
    LOAN_UPDATE_STATUS = "loan_update_status"
    ADJUSTMENT_ADD = "adjustment_add"
    ADJUSTMENT_DELETE = "adjustment_delete"
    ATTENDANCE_UPDATE = "attendance_update"
    JUSTIFICATION_REVIEW = "justification_review"
    ADMIN_ADD = "admin_add"
    ADMIN_DELETE = "admin_delete"
