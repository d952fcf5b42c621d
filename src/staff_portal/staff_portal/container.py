from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .approvals.service import ApprovalService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import ADVANCE_NOTICE_DAYS, DEFAULT_TOKEN_TTL_MINUTES, MONTHLY_PAID_LEAVE_QUOTA, WEEK_START
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.policy import LeavePolicy
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    approval_service: ApprovalService


def assemble(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    token_service: TokenService,
    leave_policy: LeavePolicy | None = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    employee_service = EmployeeService(employees_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo),
        employee_service=employee_service,
        attendance_service=AttendanceService(attendance_repo, employee_service),
        leave_service=LeaveService(leaves_repo, employee_service, policy=leave_policy),
        approval_service=ApprovalService(attendance_repo, leaves_repo),
    )


def build_container(*, db_config: dict, settings=None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    token_service = TokenService(
        str(getattr(settings, "SECRET_KEY", "") or "dev-secret-key"),
        algorithm=str(getattr(settings, "JWT_ALGORITHM", "HS256")),
        ttl_minutes=int(getattr(settings, "TOKEN_TTL_MINUTES", DEFAULT_TOKEN_TTL_MINUTES)),
    )
    leave_policy = LeavePolicy(
        advance_notice_days=int(getattr(settings, "ADVANCE_NOTICE_DAYS", ADVANCE_NOTICE_DAYS)),
        monthly_paid_quota=int(getattr(settings, "MONTHLY_PAID_LEAVE_QUOTA", MONTHLY_PAID_LEAVE_QUOTA)),
        week_start=int(getattr(settings, "WEEK_START", WEEK_START)),
    )

    return assemble(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        token_service=token_service,
        leave_policy=leave_policy,
        conn=conn,
    )
