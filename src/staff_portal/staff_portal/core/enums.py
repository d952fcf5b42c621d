from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


# Roles allowed to decide pending attendance/leave records.
APPROVER_ROLES = frozenset({Role.ADMIN, Role.MANAGER})

# Roles an admin may hand out through create-user / update-user-role.
ASSIGNABLE_ROLES = frozenset({Role.EMPLOYEE, Role.MANAGER})


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Attendance record status stored in the database."""

    PENDING = "pending"
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    EARNED = "earned"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    """Approval flow status for leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RecordKind(str, Enum):
    ATTENDANCE = "attendance"
    LEAVE = "leave"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    HALF_DAY = "half_day"
