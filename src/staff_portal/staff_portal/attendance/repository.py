from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_status(self, status: AttendanceStatus, *, limit: int = 500) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
    ) -> int:
        """Insert the day's record.

        Must raise AlreadyCheckedIn when (employee_id, work_date) already
        exists, including when a concurrent insert won the race.
        """

        raise NotImplementedError

    def close_session(self, *, attendance_id: int, check_out: time, work_hours: float) -> bool:
        """Set check-out only if the session is still open."""

        raise NotImplementedError

    def decide(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        """Move a pending record to a terminal status. False if it was not pending."""

        raise NotImplementedError
