from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    is_paid: bool
    days_count: int
    created_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def holds_quota(self) -> bool:
        """Pending and approved requests count against limits; rejected ones do not."""
        return self.status in (LeaveStatus.PENDING, LeaveStatus.APPROVED)

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "is_paid": self.is_paid,
            "days_count": self.days_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
        }


@dataclass(frozen=True)
class LeaveDraft:
    """A validated leave request that has not been stored yet."""

    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str

    @property
    def is_paid(self) -> bool:
        return self.leave_type != LeaveType.UNPAID

    @property
    def days_count(self) -> int:
        return inclusive_days(self.start_date, self.end_date)


@dataclass(frozen=True)
class LeaveBalance:
    year: int
    month: int
    paid_quota: int
    paid_used: int
    unpaid_requested: int

    @property
    def paid_remaining(self) -> int:
        return max(self.paid_quota - self.paid_used, 0)

    def to_dict(self) -> dict:
        return {
            "month": f"{self.year:04d}-{self.month:02d}",
            "paid_quota": self.paid_quota,
            "paid_used": self.paid_used,
            "paid_remaining": self.paid_remaining,
            "unpaid_requested": self.unpaid_requested,
        }
