from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from staff_portal.attendance.model import AttendanceRecord
from staff_portal.container import assemble
from staff_portal.core.enums import AttendanceStatus, EmployeeStatus, LeaveStatus, LeaveType, Role
from staff_portal.core.exceptions import AlreadyCheckedIn, ValidationError
from staff_portal.employees.model import Employee
from staff_portal.leaves.model import LeaveRequest
from staff_portal.main import create_app
from staff_portal.users.model import Identity, User
from staff_portal.users.tokens import TokenService

ADMIN_ID, MANAGER_ID, EMPLOYEE_ID, OTHER_EMPLOYEE_ID, UNLINKED_ID = 1, 2, 3, 4, 5


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._roles: dict[int, Role] = {}
        self._id = 0

    def add(self, email: str, password: str, role: Optional[Role], *, full_name: str = "", is_active=True) -> int:
        self._id += 1
        self._users[self._id] = User(
            user_id=self._id,
            email=email,
            full_name=full_name or email.split("@")[0].title(),
            password_hash=generate_password_hash(password),
            role=None,
            is_active=is_active,
        )
        if role is not None:
            self._roles[self._id] = role
        return self._id

    def get_by_id(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return replace(user, role=self._roles.get(user_id)) if user else None

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return self.get_by_id(user.user_id)
        return None

    def get_role(self, user_id: int) -> Optional[Role]:
        if user_id not in self._users:
            return None
        return self._roles.get(user_id, Role.EMPLOYEE)

    def create_user(self, *, email: str, password_hash: str, full_name: str, role: Role) -> int:
        if self.get_by_email(email):
            raise ValidationError("A user with this email already exists")
        self._id += 1
        self._users[self._id] = User(
            user_id=self._id, email=email, full_name=full_name, password_hash=password_hash, role=None
        )
        self._roles[self._id] = role
        return self._id

    def set_role(self, user_id: int, role: Role) -> bool:
        if self._roles.get(user_id) == Role.ADMIN:
            return False
        self._roles[user_id] = role
        return True

    def list_with_roles(self):
        return [self.get_by_id(uid) for uid in sorted(self._users)]


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[int, Employee] = {}
        self._id = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._rows.get(employee_id)

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        for e in self._rows.values():
            if e.user_id == user_id:
                return e
        return None

    def list_all(self, *, status=None):
        return [e for e in self._rows.values() if status is None or e.status == status]

    def create(self, *, user_id, employee_code, full_name, email, department, designation, date_of_joining, phone=None) -> int:
        if any(e.employee_code == employee_code for e in self._rows.values()):
            raise ValidationError("Employee code or linked user already exists")
        self._id += 1
        self._rows[self._id] = Employee(
            employee_id=self._id,
            user_id=user_id,
            employee_code=employee_code,
            full_name=full_name,
            email=email,
            department=department,
            designation=designation,
            status=EmployeeStatus.ACTIVE,
            date_of_joining=date_of_joining,
            phone=phone,
        )
        return self._id

    def update(self, employee_id: int, fields: dict) -> bool:
        if employee_id not in self._rows:
            return False
        self._rows[employee_id] = replace(self._rows[employee_id], **fields)
        return True


class InMemoryAttendance:
    def __init__(self):
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._rows.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self._rows.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def list_for_employee(self, employee_id: int, *, start_date=None, end_date=None, limit: int = 31):
        items = [
            r
            for r in self._rows.values()
            if r.employee_id == employee_id
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_by_status(self, status: AttendanceStatus, *, limit: int = 500):
        return [r for r in self._rows.values() if r.status == status][:limit]

    def create_checkin(self, *, employee_id: int, work_date: date, check_in: time, status: AttendanceStatus) -> int:
        if self.get_for_employee_and_date(employee_id, work_date):
            raise AlreadyCheckedIn("You have already checked in today")
        self._id += 1
        self._rows[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
        )
        return self._id

    def close_session(self, *, attendance_id: int, check_out: time, work_hours: float) -> bool:
        r = self._rows.get(attendance_id)
        if not r or not r.is_open:
            return False
        self._rows[attendance_id] = replace(r, check_out=check_out, work_hours=work_hours)
        return True

    def decide(self, *, attendance_id: int, status: AttendanceStatus, approved_by: int, approved_at: datetime) -> bool:
        r = self._rows.get(attendance_id)
        if not r or r.status != AttendanceStatus.PENDING:
            return False
        self._rows[attendance_id] = replace(r, status=status, approved_by=approved_by, approved_at=approved_at)
        return True


class InMemoryLeaves:
    def __init__(self):
        self._rows: dict[int, LeaveRequest] = {}
        self._id = 0

    def add(self, employee_id: int, start: date, end: date, *, leave_type=LeaveType.CASUAL, status=LeaveStatus.PENDING) -> int:
        self._id += 1
        self._rows[self._id] = LeaveRequest(
            leave_id=self._id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason="seeded",
            status=status,
            is_paid=leave_type != LeaveType.UNPAID,
            days_count=(end - start).days + 1,
        )
        return self._id

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        return self._rows.get(leave_id)

    def list_for_employee(self, employee_id: int, *, start_from=None, start_to=None, limit: int = 500):
        items = [
            r
            for r in self._rows.values()
            if r.employee_id == employee_id
            and (start_from is None or r.start_date >= start_from)
            and (start_to is None or r.start_date <= start_to)
        ]
        items.sort(key=lambda r: r.start_date, reverse=True)
        return items[:limit]

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500):
        return [r for r in self._rows.values() if r.status == status][:limit]

    def create(self, *, employee_id, leave_type, start_date, end_date, reason, is_paid, days_count) -> int:
        self._id += 1
        self._rows[self._id] = LeaveRequest(
            leave_id=self._id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            is_paid=is_paid,
            days_count=days_count,
        )
        return self._id

    def decide(self, *, leave_id: int, status: LeaveStatus, approved_by: int, approved_at: datetime) -> bool:
        r = self._rows.get(leave_id)
        if not r or r.status != LeaveStatus.PENDING:
            return False
        self._rows[leave_id] = replace(r, status=status, approved_by=approved_by, approved_at=approved_at)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    # A Monday.
    return datetime(2025, 3, 3, 9, 15, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.add("admin@example.com", "admin123", Role.ADMIN)
    repo.add("manager@example.com", "manager123", Role.MANAGER)
    repo.add("employee@example.com", "employee123", Role.EMPLOYEE)
    repo.add("second@example.com", "second123", Role.EMPLOYEE)
    repo.add("unlinked@example.com", "unlinked123", None)
    return repo


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    repo = InMemoryEmployees()
    joined = date(2024, 1, 15)
    repo.create(
        user_id=EMPLOYEE_ID, employee_code="EMP001", full_name="Employee", email="employee@example.com",
        department="Engineering", designation="Developer", date_of_joining=joined,
    )
    repo.create(
        user_id=OTHER_EMPLOYEE_ID, employee_code="EMP002", full_name="Second", email="second@example.com",
        department="Engineering", designation="Tester", date_of_joining=joined,
    )
    repo.create(
        user_id=MANAGER_ID, employee_code="EMP003", full_name="Manager", email="manager@example.com",
        department="Engineering", designation="Team Lead", date_of_joining=joined,
    )
    return repo


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def container(users_repo, employees_repo, attendance_repo, leaves_repo):
    return assemble(
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_service=TokenService("test-secret", ttl_minutes=30),
    )


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture
def manager() -> Identity:
    return Identity(user_id=MANAGER_ID, role=Role.MANAGER)


@pytest.fixture
def employee() -> Identity:
    return Identity(user_id=EMPLOYEE_ID, role=Role.EMPLOYEE)


@pytest.fixture
def auth_header(container):
    def _header(user_id: int) -> dict:
        return {"Authorization": f"Bearer {container.token_service.issue(user_id)}"}

    return _header
