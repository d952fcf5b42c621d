from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between, month_bounds, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LIST_LIMIT, WORK_HOURS_PRECISION
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn, Forbidden, NoOpenSession, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from ..users.model import Identity
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in / check-out sessions.

    One record per (employee, calendar date). A record with a check-in and no
    check-out is an open session. Status stays `pending` until an approver
    decides it (see ApprovalService).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeService,
        *,
        precision: int = WORK_HOURS_PRECISION,
    ):
        self._attendance = attendance
        self._employees = employees
        self._precision = int(precision)

    def check_in(self, actor: Identity, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        employee = self._employees.require_owned(actor, employee_id)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if existing:
            raise AlreadyCheckedIn("You have already checked in today")

        # The unique (employee_id, work_date) key rejects a concurrent duplicate.
        attendance_id = self._attendance.create_checkin(
            employee_id=employee.employee_id,
            work_date=today,
            check_in=now.time(),
            status=AttendanceStatus.PENDING,
        )
        logger.info("employee %s checked in at %s", employee.employee_id, now.isoformat())
        return self._get(attendance_id)

    def check_out(self, actor: Identity, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        employee = self._employees.require_owned(actor, employee_id)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if not record:
            raise NoOpenSession("You have not checked in today")
        if not record.is_open:
            raise NoOpenSession("You have already checked out today")

        check_out = now.time()
        if check_out < record.check_in:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        work_hours = hours_between(record.check_in, check_out, precision=self._precision)
        if not self._attendance.close_session(
            attendance_id=record.attendance_id,
            check_out=check_out,
            work_hours=work_hours,
        ):
            raise NoOpenSession("You have already checked out today")

        logger.info("employee %s checked out at %s (%.2fh)", employee.employee_id, now.isoformat(), work_hours)
        return self._get(record.attendance_id)

    def today(self, actor: Identity, employee_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        employee = self._employees.require_owned(actor, employee_id)
        return self._attendance.get_for_employee_and_date(employee.employee_id, (now or now_local()).date())

    def history(
        self,
        actor: Identity,
        employee_id: int,
        *,
        month: Optional[tuple[int, int]] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        employee = self._employees.require_owned(actor, employee_id)
        start = end = None
        if month:
            start, end = month_bounds(*month)
        return self._attendance.list_for_employee(employee.employee_id, start_date=start, end_date=end, limit=limit)

    def pending(self, actor: Identity, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[AttendanceRecord]:
        if not actor.can_approve:
            raise Forbidden("Only admin or manager can review attendance")
        return self._attendance.list_by_status(AttendanceStatus.PENDING, limit=limit)

    def _get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record
