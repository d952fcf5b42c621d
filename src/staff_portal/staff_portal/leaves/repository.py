from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        """Requests whose start date lies in [start_from, start_to]."""

        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        is_paid: bool,
        days_count: int,
    ) -> int:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        """Move a pending request to a terminal status. False if it was not pending."""

        raise NotImplementedError
