from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from src.paytracker.paytracker.adjustments.model import Adjustment
from src.paytracker.paytracker.adjustments.service import AdjustmentService
from src.paytracker.paytracker.attendance.service import AttendanceService
from src.paytracker.paytracker.audit.model import AuditEntry, LoginLog
from src.paytracker.paytracker.audit.service import AuditService
from src.paytracker.paytracker.chat.model import ChatMessage, Presence
from src.paytracker.paytracker.chat.service import ChatService
from src.paytracker.paytracker.companies.model import Company, RegistrationCode, SiteSettings
from src.paytracker.paytracker.companies.owner_service import OwnerService
from src.paytracker.paytracker.companies.service import CompanyService
from src.paytracker.paytracker.core.enums import AdminRole, CompanyStatus, LoanStatus, PayPeriod, RequestStatus, Role
from src.paytracker.paytracker.core.exceptions import ValidationError
from src.paytracker.paytracker.departments.model import Department
from src.paytracker.paytracker.departments.service import DepartmentService
from src.paytracker.paytracker.employees.model import Employee
from src.paytracker.paytracker.employees.service import EmployeeService
from src.paytracker.paytracker.justifications.model import AbsenceJustification
from src.paytracker.paytracker.justifications.service import JustificationService
from src.paytracker.paytracker.loans.model import Loan
from src.paytracker.paytracker.loans.service import LoanService
from src.paytracker.paytracker.notifications.model import Notification
from src.paytracker.paytracker.notifications.service import NotificationService
from src.paytracker.paytracker.payroll.model import ArchivedPayroll, PayStub
from src.paytracker.paytracker.payroll.repository import ClosedPeriod
from src.paytracker.paytracker.payroll.service import PayrollService
from src.paytracker.paytracker.users.model import Admin, SessionUser
from src.paytracker.paytracker.users.service import AdminService, AuthService

# Wednesday; the weekly period around it runs Monday 22 to Sunday 28 July 2024.
FIXED_NOW = datetime(2024, 7, 24, 10, 0, 0)
PERIOD_START = date(2024, 7, 22)
OWNER_PASSWORD = "owner-test"


class InMemoryCompanyRepository:
    def __init__(self):
        self.companies: dict[int, Company] = {}
        self.codes: dict[str, RegistrationCode] = {}
        self.admins = None
        self.deleted: list[int] = []

    def get_by_id(self, company_id):
        return self.companies.get(int(company_id))

    def get_by_identifier(self, identifier):
        for c in self.companies.values():
            if c.identifier == identifier:
                return c
        return None

    def list_all(self):
        return list(self.companies.values())

    def register(self, *, code, identifier, name, super_admin_name, super_admin_email, super_admin_phone,
                 password_hash, pay_period, currency, current_period_start, registered_at):
        reg = self.codes.get(code)
        if not reg or reg.is_used:
            raise ValidationError("Ce code d'inscription a déjà été utilisé.")
        company_id = len(self.companies) + len(self.deleted) + 1
        self.companies[company_id] = Company(
            company_id=company_id,
            identifier=identifier,
            name=name,
            super_admin_name=super_admin_name,
            super_admin_email=super_admin_email,
            super_admin_phone=super_admin_phone,
            pay_period=pay_period,
            current_period_start=current_period_start,
            currency=currency,
            registered_at=registered_at,
        )
        self.codes[code] = replace(reg, is_used=True, used_by_company_id=company_id)
        if self.admins is not None:
            self.admins.create(
                company_id=company_id, name=super_admin_name, password_hash=password_hash, role=AdminRole.SUPERADMIN
            )
        return company_id

    def update_profile(self, company_id, *, name, description, logo_url, pay_period, currency, current_period_start):
        c = self.companies[int(company_id)]
        self.companies[c.company_id] = replace(
            c,
            name=name,
            description=description,
            logo_url=logo_url,
            pay_period=pay_period,
            currency=currency,
            current_period_start=current_period_start,
        )

    def update_identity(self, company_id, *, name, identifier):
        c = self.companies[int(company_id)]
        self.companies[c.company_id] = replace(c, name=name, identifier=identifier)

    def set_status(self, company_id, status):
        c = self.companies[int(company_id)]
        self.companies[c.company_id] = replace(c, status=CompanyStatus(status))

    def delete_company(self, company_id):
        if int(company_id) not in self.companies:
            return False
        del self.companies[int(company_id)]
        self.deleted.append(int(company_id))
        return True

    def get_registration_code(self, code):
        return self.codes.get(code)

    def get_code_for_company(self, company_id):
        for reg in self.codes.values():
            if reg.used_by_company_id == int(company_id):
                return reg
        return None

    def create_registration_code(self, *, code, created_at, expires_at):
        self.codes[code] = RegistrationCode(code=code, is_used=False, created_at=created_at, expires_at=expires_at)

    def list_registration_codes(self, *, limit):
        return list(self.codes.values())[:limit]

    def advance_period(self, company_id, expected_start, next_start):
        c = self.companies[int(company_id)]
        if c.current_period_start != expected_start:
            raise ValidationError("Cette période a déjà été clôturée.")
        self.companies[c.company_id] = replace(c, current_period_start=next_start)


class InMemorySiteSettingsRepository:
    def __init__(self):
        self.settings = SiteSettings()

    def get(self):
        return self.settings

    def save(self, settings):
        self.settings = settings


class InMemoryAdminRepository:
    def __init__(self):
        self.admins: dict[int, Admin] = {}
        self._next_id = 1

    def get_by_id(self, admin_id):
        return self.admins.get(int(admin_id))

    def get_by_name(self, company_id, name):
        for a in self.admins.values():
            if a.company_id == int(company_id) and a.name == name:
                return a
        return None

    def list_for_company(self, company_id):
        return [a for a in self.admins.values() if a.company_id == int(company_id)]

    def create(self, *, company_id, name, password_hash, role):
        admin_id = self._next_id
        self._next_id += 1
        self.admins[admin_id] = Admin(
            admin_id=admin_id, company_id=int(company_id), name=name, password_hash=password_hash, role=role
        )
        return admin_id

    def update_password(self, admin_id, password_hash):
        self.admins[int(admin_id)] = replace(self.admins[int(admin_id)], password_hash=password_hash)

    def delete(self, admin_id):
        return self.admins.pop(int(admin_id), None) is not None


class InMemoryEmployeeRepository:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self._next_id = 1

    def get_by_id(self, employee_id):
        return self.employees.get(int(employee_id))

    def get_by_phone(self, company_id, phone):
        for e in self.employees.values():
            if e.company_id == int(company_id) and e.phone == phone:
                return e
        return None

    def list_for_company(self, company_id, *, department_id=None):
        return [
            e
            for e in self.employees.values()
            if e.company_id == int(company_id) and (department_id is None or e.department_id == department_id)
        ]

    def create(self, *, company_id, first_name, last_name, position, department_id, birth_date, address, phone,
               photo_url, daily_wage, registered_on):
        employee_id = self._next_id
        self._next_id += 1
        self.employees[employee_id] = Employee(
            employee_id=employee_id,
            company_id=int(company_id),
            first_name=first_name,
            last_name=last_name,
            position=position,
            department_id=department_id,
            phone=phone,
            daily_wage=daily_wage,
            current_wage=daily_wage,
            registered_on=registered_on,
            birth_date=birth_date,
            address=address,
            photo_url=photo_url,
        )
        return employee_id

    def update(self, employee_id, *, first_name, last_name, position, department_id, birth_date, address, phone,
               photo_url, daily_wage):
        e = self.employees[int(employee_id)]
        self.employees[e.employee_id] = replace(
            e,
            first_name=first_name,
            last_name=last_name,
            position=position,
            department_id=department_id,
            birth_date=birth_date,
            address=address,
            phone=phone,
            photo_url=photo_url,
            daily_wage=daily_wage,
        )

    def set_department(self, employee_id, department_id):
        e = self.employees[int(employee_id)]
        self.employees[e.employee_id] = replace(e, department_id=department_id)

    def delete(self, employee_id):
        return self.employees.pop(int(employee_id), None) is not None

    def count_in_department(self, department_id):
        return sum(1 for e in self.employees.values() if e.department_id == int(department_id))


class InMemoryDepartmentRepository:
    def __init__(self):
        self.departments: dict[int, Department] = {}
        self._next_id = 1

    def get_by_id(self, department_id):
        return self.departments.get(int(department_id))

    def get_by_manager(self, company_id, manager_id):
        for d in self.departments.values():
            if d.company_id == int(company_id) and d.manager_id == int(manager_id):
                return d
        return None

    def list_for_company(self, company_id):
        return [d for d in self.departments.values() if d.company_id == int(company_id)]

    def create(self, *, company_id, name, manager_id):
        department_id = self._next_id
        self._next_id += 1
        self.departments[department_id] = Department(
            department_id=department_id, company_id=int(company_id), name=name, manager_id=manager_id
        )
        return department_id

    def update(self, department_id, *, name, manager_id):
        d = self.departments[int(department_id)]
        self.departments[d.department_id] = replace(d, name=name, manager_id=manager_id)

    def delete(self, department_id):
        return self.departments.pop(int(department_id), None) is not None


class InMemoryAttendanceRepository:
    def __init__(self):
        self.days: dict[tuple[int, date], bool] = {}

    def get_for_employees(self, employee_ids, start, end):
        out: dict[int, dict[date, bool]] = {}
        for (employee_id, work_date), present in self.days.items():
            if employee_id in employee_ids and start <= work_date <= end:
                out.setdefault(employee_id, {})[work_date] = present
        return out

    def set_day(self, employee_id, work_date, is_present):
        self.days[(int(employee_id), work_date)] = bool(is_present)


class InMemoryAdjustmentRepository:
    def __init__(self):
        self.adjustments: dict[int, Adjustment] = {}
        self._next_id = 1

    def get_by_id(self, adjustment_id):
        return self.adjustments.get(int(adjustment_id))

    def list_for_employees(self, employee_ids):
        out: dict[int, list[Adjustment]] = {}
        for a in self.adjustments.values():
            if a.employee_id in employee_ids:
                out.setdefault(a.employee_id, []).append(a)
        return out

    def create(self, *, employee_id, adjustment_type, amount, reason, created_at):
        adjustment_id = self._next_id
        self._next_id += 1
        self.adjustments[adjustment_id] = Adjustment(
            adjustment_id=adjustment_id,
            employee_id=int(employee_id),
            adjustment_type=adjustment_type,
            amount=amount,
            reason=reason,
            created_at=created_at,
        )
        return adjustment_id

    def delete(self, adjustment_id):
        return self.adjustments.pop(int(adjustment_id), None) is not None


class InMemoryLoanRepository:
    def __init__(self):
        self.loans: dict[int, Loan] = {}
        self._next_id = 1

    def get_by_id(self, loan_id):
        return self.loans.get(int(loan_id))

    def get_active_for_employee(self, employee_id):
        for loan in self.loans.values():
            if loan.employee_id == int(employee_id) and loan.status == LoanStatus.ACTIVE:
                return loan
        return None

    def list_for_company(self, company_id, *, status=None):
        return [
            loan
            for loan in self.loans.values()
            if loan.company_id == int(company_id) and (status is None or loan.status == status)
        ]

    def create(self, *, company_id, employee_id, amount, repayment_amount, start_date, created_at):
        loan_id = self._next_id
        self._next_id += 1
        self.loans[loan_id] = Loan(
            loan_id=loan_id,
            company_id=int(company_id),
            employee_id=int(employee_id),
            amount=amount,
            repayment_amount=repayment_amount,
            balance=amount,
            start_date=start_date,
            created_at=created_at,
        )
        return loan_id

    def set_status(self, loan_id, status):
        self.loans[int(loan_id)] = replace(self.loans[int(loan_id)], status=status)


class InMemoryPayrollRepository:
    """Applies a close to the other in-memory stores, like the single MySQL transaction does."""

    def __init__(self, companies, employees, adjustments, loans):
        self._companies = companies
        self._employees = employees
        self._adjustments = adjustments
        self._loans = loans
        self.archives: dict[int, ArchivedPayroll] = {}
        self.stubs: list[PayStub] = []

    def close_period(self, *, company_id, period_label, period_start, period_end, next_period_start, total_payroll,
                     departments, stubs, loan_repayments, closed_at):
        self._companies.advance_period(company_id, period_start, next_period_start)

        archive_id = len(self.archives) + 1
        self.archives[archive_id] = ArchivedPayroll(
            archive_id=archive_id,
            company_id=company_id,
            period_label=period_label,
            period_start=period_start,
            period_end=period_end,
            total_payroll=total_payroll,
            departments=tuple(departments),
            closed_at=closed_at,
        )
        for s in stubs:
            self.stubs.append(replace(s, stub_id=len(self.stubs) + 1, archive_id=archive_id))

        repaid = []
        for loan_id, amount in loan_repayments:
            loan = self._loans.loans[loan_id]
            if loan.company_id != company_id or loan.status != LoanStatus.ACTIVE:
                continue
            balance = max(loan.balance - amount, Decimal("0"))
            status = LoanStatus.REPAID if balance <= 0 else loan.status
            self._loans.loans[loan_id] = replace(loan, balance=balance, status=status)
            if status == LoanStatus.REPAID:
                repaid.append(loan_id)

        company_employee_ids = set()
        for e in self._employees.list_for_company(company_id):
            company_employee_ids.add(e.employee_id)
            self._employees.employees[e.employee_id] = replace(e, current_wage=e.daily_wage)
        for adjustment_id, a in list(self._adjustments.adjustments.items()):
            if a.employee_id in company_employee_ids:
                del self._adjustments.adjustments[adjustment_id]

        return ClosedPeriod(archive_id=archive_id, repaid_loan_ids=tuple(repaid))

    def list_archives(self, company_id):
        return sorted(
            (a for a in self.archives.values() if a.company_id == int(company_id)),
            key=lambda a: a.closed_at,
            reverse=True,
        )

    def get_archive(self, archive_id):
        return self.archives.get(int(archive_id))

    def delete_archive(self, archive_id):
        if self.archives.pop(int(archive_id), None) is None:
            return False
        self.stubs = [replace(s, archive_id=None) if s.archive_id == int(archive_id) else s for s in self.stubs]
        return True

    def list_stubs_for_employee(self, employee_id, *, limit):
        return [s for s in reversed(self.stubs) if s.employee_id == int(employee_id)][:limit]

    def list_stubs_for_archive(self, archive_id):
        return [s for s in self.stubs if s.archive_id == int(archive_id)]


class InMemoryJustificationRepository:
    def __init__(self, employees):
        self._employees = employees
        self.items: dict[int, AbsenceJustification] = {}

    def get_by_id(self, justification_id):
        return self.items.get(int(justification_id))

    def find_pending(self, employee_id, work_date):
        for j in self.items.values():
            if j.employee_id == int(employee_id) and j.work_date == work_date and j.status == RequestStatus.PENDING:
                return j
        return None

    def list_for_company(self, company_id, *, status=None, department_id=None, limit=200):
        return [
            j
            for j in self.items.values()
            if j.company_id == int(company_id)
            and (status is None or j.status == status)
            and (department_id is None or j.department_id == department_id)
        ][:limit]

    def list_for_employee(self, employee_id, *, limit=100):
        return [j for j in self.items.values() if j.employee_id == int(employee_id)][:limit]

    def create(self, *, company_id, employee_id, work_date, reason, document_url, created_at):
        justification_id = len(self.items) + 1
        employee = self._employees.get_by_id(employee_id)
        self.items[justification_id] = AbsenceJustification(
            justification_id=justification_id,
            company_id=int(company_id),
            employee_id=int(employee_id),
            work_date=work_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
            document_url=document_url,
            employee_name=employee.full_name if employee else "",
            department_id=employee.department_id if employee else None,
        )
        return justification_id

    def decide(self, justification_id, *, status, reviewed_by, reviewed_at):
        j = self.items.get(int(justification_id))
        if not j or j.status != RequestStatus.PENDING:
            return False
        self.items[j.justification_id] = replace(j, status=status, reviewed_by=reviewed_by, reviewed_at=reviewed_at)
        return True


class InMemoryNotificationRepository:
    def __init__(self):
        self.items: dict[int, Notification] = {}

    def add(self, *, company_id, title, description, link, notification_type, created_at):
        notification_id = len(self.items) + 1
        self.items[notification_id] = Notification(
            notification_id=notification_id,
            company_id=int(company_id),
            title=title,
            description=description,
            link=link,
            notification_type=notification_type,
            is_read=False,
            created_at=created_at,
        )
        return notification_id

    def list_for_company(self, company_id, *, limit):
        items = [n for n in self.items.values() if n.company_id == int(company_id)]
        return sorted(items, key=lambda n: n.notification_id, reverse=True)[:limit]

    def count_unread(self, company_id):
        return sum(1 for n in self.items.values() if n.company_id == int(company_id) and not n.is_read)

    def mark_read(self, company_id, notification_id):
        n = self.items.get(int(notification_id))
        if not n or n.company_id != int(company_id):
            return False
        self.items[n.notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, company_id):
        count = 0
        for n in list(self.items.values()):
            if n.company_id == int(company_id) and not n.is_read:
                self.items[n.notification_id] = replace(n, is_read=True)
                count += 1
        return count


class InMemoryAuditRepository:
    def __init__(self):
        self.entries: list[AuditEntry] = []
        self.logins: list[LoginLog] = []

    def add_entry(self, *, company_id, action, user_name, details, created_at):
        self.entries.append(
            AuditEntry(
                log_id=len(self.entries) + 1,
                company_id=company_id,
                action=action,
                user_name=user_name,
                details=details,
                created_at=created_at,
            )
        )
        return len(self.entries)

    def list_entries(self, company_id, *, limit):
        return [e for e in reversed(self.entries) if e.company_id == int(company_id)][:limit]

    def add_login(self, *, company_id, company_name, user_name, user_type, details, created_at):
        self.logins.append(
            LoginLog(
                log_id=len(self.logins) + 1,
                company_id=company_id,
                company_name=company_name,
                user_name=user_name,
                user_type=user_type,
                details=details,
                created_at=created_at,
            )
        )
        return len(self.logins)

    def list_logins(self, company_id, *, limit):
        return [entry for entry in reversed(self.logins) if entry.company_id == int(company_id)][:limit]


class InMemoryChatRepository:
    def __init__(self):
        self.messages: list[ChatMessage] = []
        self.presence: dict[tuple[int, str], Presence] = {}

    def add_message(self, *, company_id, conversation_id, sender_id, sender_name, receiver_id, body, created_at):
        message_id = len(self.messages) + 1
        self.messages.append(
            ChatMessage(
                message_id=message_id,
                company_id=company_id,
                conversation_id=conversation_id,
                sender_id=sender_id,
                sender_name=sender_name,
                receiver_id=receiver_id,
                body=body,
                is_read=False,
                created_at=created_at,
            )
        )
        return message_id

    def list_for_participant(self, company_id, principal_id):
        return [
            m
            for m in self.messages
            if m.company_id == company_id and principal_id in (m.sender_id, m.receiver_id)
        ]

    def mark_read(self, company_id, conversation_id, receiver_id):
        count = 0
        for i, m in enumerate(self.messages):
            if (
                m.company_id == company_id
                and m.conversation_id == conversation_id
                and m.receiver_id == receiver_id
                and not m.is_read
            ):
                self.messages[i] = replace(m, is_read=True)
                count += 1
        return count

    def unread_counts(self, company_id, receiver_id):
        out: dict[str, int] = {}
        for m in self.messages:
            if m.company_id == company_id and m.receiver_id == receiver_id and not m.is_read:
                out[m.sender_id] = out.get(m.sender_id, 0) + 1
        return out

    def touch_presence(self, company_id, principal_id, display_name, seen_at):
        self.presence[(company_id, principal_id)] = Presence(
            principal_id=principal_id, display_name=display_name, last_seen=seen_at
        )

    def list_presence_since(self, company_id, since):
        return [p for (cid, _), p in self.presence.items() if cid == company_id and p.last_seen >= since]


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def repos():
    companies = InMemoryCompanyRepository()
    admins = InMemoryAdminRepository()
    companies.admins = admins
    employees = InMemoryEmployeeRepository()
    adjustments = InMemoryAdjustmentRepository()
    loans = InMemoryLoanRepository()
    return SimpleNamespace(
        companies=companies,
        site_settings=InMemorySiteSettingsRepository(),
        admins=admins,
        employees=employees,
        departments=InMemoryDepartmentRepository(),
        attendance=InMemoryAttendanceRepository(),
        adjustments=adjustments,
        loans=loans,
        payroll=InMemoryPayrollRepository(companies, employees, adjustments, loans),
        justifications=InMemoryJustificationRepository(employees),
        notifications=InMemoryNotificationRepository(),
        audit=InMemoryAuditRepository(),
        chat=InMemoryChatRepository(),
    )


@pytest.fixture
def services(repos):
    audit = AuditService(repos.audit)
    notifications = NotificationService(repos.notifications)
    companies = CompanyService(repos.companies)
    return SimpleNamespace(
        audit=audit,
        notifications=notifications,
        companies=companies,
        owner=OwnerService(repos.companies, repos.admins, repos.site_settings),
        auth=AuthService(
            companies, repos.admins, repos.employees, repos.departments, audit, owner_password=OWNER_PASSWORD
        ),
        admins=AdminService(repos.admins, audit),
        departments=DepartmentService(repos.departments, repos.employees, audit),
        employees=EmployeeService(repos.employees, repos.departments, repos.loans, notifications, audit),
        attendance=AttendanceService(repos.attendance, repos.employees, companies, audit),
        adjustments=AdjustmentService(repos.adjustments, repos.employees, audit),
        loans=LoanService(repos.loans, repos.employees, companies, audit),
        payroll=PayrollService(
            repos.payroll,
            companies=companies,
            employees=repos.employees,
            departments=repos.departments,
            attendance=repos.attendance,
            adjustments=repos.adjustments,
            loans=repos.loans,
            notifications=notifications,
            audit=audit,
        ),
        justifications=JustificationService(
            repos.justifications, repos.employees, repos.attendance, companies, notifications, audit
        ),
        chat=ChatService(repos.chat, repos.admins, repos.departments, repos.employees),
    )


@pytest.fixture
def company(repos):
    """Weekly-paid demo company, open period 22-28 July 2024, super admin ``admin`` / ``admin123``."""
    repos.companies.create_registration_code(code="1000000001", created_at=FIXED_NOW, expires_at=None)
    company_id = repos.companies.register(
        code="1000000001",
        identifier="EPT-0001",
        name="Demo SARL",
        super_admin_name="admin",
        super_admin_email="admin@demo.test",
        super_admin_phone="770000000",
        password_hash=generate_password_hash("admin123"),
        pay_period=PayPeriod.WEEKLY,
        currency="XOF",
        current_period_start=PERIOD_START,
        registered_at=FIXED_NOW,
    )
    return repos.companies.get_by_id(company_id)


@pytest.fixture
def admin(repos, company):
    a = repos.admins.get_by_name(company.company_id, "admin")
    return SessionUser(
        user_id=a.admin_id,
        name=a.name,
        role=Role.ADMIN,
        company_id=company.company_id,
        company_name=company.name,
        admin_role=AdminRole.SUPERADMIN,
    )


@pytest.fixture
def staff(repos, company):
    """Two departments and three employees; Awa manages Production."""
    production = repos.departments.create(company_id=company.company_id, name="Production", manager_id=None)
    logistics = repos.departments.create(company_id=company.company_id, name="Logistique", manager_id=None)

    def hire(first, last, phone, department_id, wage):
        return repos.employees.create(
            company_id=company.company_id,
            first_name=first,
            last_name=last,
            position="Opérateur",
            department_id=department_id,
            birth_date=None,
            address="",
            phone=phone,
            photo_url="",
            daily_wage=Decimal(wage),
            registered_on=PERIOD_START,
        )

    awa = hire("Awa", "Diop", "770000001", production, "5000")
    moussa = hire("Moussa", "Ndiaye", "770000002", production, "4000")
    fatou = hire("Fatou", "Sow", "770000003", logistics, "4500")
    repos.departments.update(production, name="Production", manager_id=awa)
    return SimpleNamespace(production=production, logistics=logistics, awa=awa, moussa=moussa, fatou=fatou)


@pytest.fixture
def manager(company, staff):
    return SessionUser(
        user_id=staff.awa,
        name="Awa Diop",
        role=Role.MANAGER,
        company_id=company.company_id,
        company_name=company.name,
        department_id=staff.production,
        department_name="Production",
    )
