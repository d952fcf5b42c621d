from __future__ import annotations

import logging
from datetime import datetime
from typing import Union

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import APPROVER_ROLES, AttendanceStatus, Decision, LeaveStatus, RecordKind, Role
from ..core.exceptions import Forbidden, InvalidStateTransition, NotFoundError, ValidationError
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository

logger = logging.getLogger(__name__)

_ATTENDANCE_OUTCOMES = {
    Decision.APPROVE: AttendanceStatus.PRESENT,
    Decision.REJECT: AttendanceStatus.ABSENT,
    Decision.HALF_DAY: AttendanceStatus.HALF_DAY,
}

_LEAVE_OUTCOMES = {
    Decision.APPROVE: LeaveStatus.APPROVED,
    Decision.REJECT: LeaveStatus.REJECTED,
}


class ApprovalService:
    """Role-gated pending -> terminal transitions for attendance and leave.

        pending --approve--> present / approved
        pending --reject --> absent  / rejected
        pending --half_day-> half_day (attendance only)

    Terminal states never change again.
    """

    def __init__(self, attendance: AttendanceRepository, leaves: LeaveRepository):
        self._attendance = attendance
        self._leaves = leaves

    def decide(
        self,
        *,
        record_kind: Union[RecordKind, str],
        record_id: int,
        decision: Union[Decision, str],
        actor_role: Union[Role, str, None],
        actor_id: int,
        now: datetime | None = None,
    ) -> Union[AttendanceRecord, LeaveRequest]:
        if _as_role(actor_role) not in APPROVER_ROLES:
            logger.warning("user %s (role=%s) tried to decide %s %s", actor_id, actor_role, record_kind, record_id)
            raise Forbidden("Only admin or manager can approve or reject records")

        try:
            kind = RecordKind(record_kind)
        except ValueError:
            raise ValidationError("Record kind must be 'attendance' or 'leave'")
        try:
            choice = Decision(decision)
        except ValueError:
            if kind == RecordKind.ATTENDANCE:
                raise ValidationError("Decision must be 'approve', 'reject' or 'half_day'")
            raise ValidationError("Decision must be 'approve' or 'reject'")

        now = now or now_local()
        if kind == RecordKind.ATTENDANCE:
            return self._decide_attendance(int(record_id), choice, int(actor_id), now)
        return self._decide_leave(int(record_id), choice, int(actor_id), now)

    def _decide_attendance(self, attendance_id: int, choice: Decision, actor_id: int, now: datetime) -> AttendanceRecord:
        status = _ATTENDANCE_OUTCOMES[choice]

        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.status != AttendanceStatus.PENDING:
            raise InvalidStateTransition(f"Attendance record is already {record.status.value}")

        if not self._attendance.decide(attendance_id=attendance_id, status=status, approved_by=actor_id, approved_at=now):
            raise InvalidStateTransition("Attendance record has already been decided")

        logger.info("user %s marked attendance %s as %s", actor_id, attendance_id, status.value)
        return self._attendance.get_by_id(attendance_id)

    def _decide_leave(self, leave_id: int, choice: Decision, actor_id: int, now: datetime) -> LeaveRequest:
        status = _LEAVE_OUTCOMES.get(choice)
        if status is None:
            raise ValidationError("Leave requests can only be approved or rejected")

        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found")
        if leave.status != LeaveStatus.PENDING:
            raise InvalidStateTransition(f"Leave request is already {leave.status.value}")

        if not self._leaves.decide(leave_id=leave_id, status=status, approved_by=actor_id, approved_at=now):
            raise InvalidStateTransition("Leave request has already been decided")

        logger.info("user %s %s leave %s", actor_id, status.value, leave_id)
        return self._leaves.get_by_id(leave_id)


def _as_role(value) -> Role | None:
    try:
        return Role(value)
    except ValueError:
        return None
