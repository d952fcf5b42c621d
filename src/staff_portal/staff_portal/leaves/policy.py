"""Leave rules.

Checks run in a fixed order and each failure has its own exception:

1. input validation (ValidationError), before any store access
2. advance notice (AdvanceNoticeViolation)
3. monthly paid quota (QuotaExceeded)
4. one leave per calendar week (WeeklyLimitViolation)

The quota month is the month of the request's start date. The weekly rule
uses the calendar week of the start date, even when that week straddles two
months.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from ..common.datetime_utils import month_bounds, week_bounds
from ..common.validators import require_non_empty
from ..core.constants import ADVANCE_NOTICE_DAYS, MONTHLY_PAID_LEAVE_QUOTA, WEEK_START
from ..core.enums import LeaveType
from ..core.exceptions import AdvanceNoticeViolation, QuotaExceeded, ValidationError, WeeklyLimitViolation
from .model import LeaveDraft, LeaveRequest


@dataclass(frozen=True)
class LeavePolicy:
    advance_notice_days: int = ADVANCE_NOTICE_DAYS
    monthly_paid_quota: int = MONTHLY_PAID_LEAVE_QUOTA
    week_start: int = WEEK_START

    def __post_init__(self):
        if not 0 <= int(self.week_start) <= 6:
            raise ValueError("week_start must be a weekday number 0-6")

    def validate(
        self,
        *,
        leave_type: Union[LeaveType, str, None],
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str],
    ) -> LeaveDraft:
        if not leave_type:
            raise ValidationError("Leave type is required")
        try:
            lt = LeaveType(leave_type)
        except ValueError:
            raise ValidationError("Leave type must be one of: casual, sick, earned, unpaid")
        if start_date is None:
            raise ValidationError("Start date is required")
        if end_date is None:
            raise ValidationError("End date is required")
        reason = require_non_empty(reason, "Reason")
        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")
        return LeaveDraft(leave_type=lt, start_date=start_date, end_date=end_date, reason=reason)

    def lookup_window(self, start_date: date) -> tuple[date, date]:
        """Start-date range of existing requests needed by check()."""
        month_first, month_last = month_bounds(start_date.year, start_date.month)
        week_first, week_last = week_bounds(start_date, week_start=self.week_start)
        return min(month_first, week_first), max(month_last, week_last)

    def check(self, draft: LeaveDraft, existing: Iterable[LeaveRequest], *, today: date) -> None:
        # Rejected requests count toward neither the quota nor the weekly limit.
        existing = [r for r in existing if r.holds_quota]

        if (draft.start_date - today).days < self.advance_notice_days:
            raise AdvanceNoticeViolation(
                f"Leave must be requested at least {self.advance_notice_days} days in advance"
            )

        if draft.is_paid:
            used = self.paid_used(existing, year=draft.start_date.year, month=draft.start_date.month)
            if used >= self.monthly_paid_quota:
                raise QuotaExceeded(
                    f"You have already used {used} of {self.monthly_paid_quota} paid leaves this month. "
                    "Please request unpaid leave instead."
                )

        week = week_bounds(draft.start_date, week_start=self.week_start)
        if any(week_bounds(r.start_date, week_start=self.week_start) == week for r in existing):
            raise WeeklyLimitViolation("Only one leave request is allowed per week")

    @staticmethod
    def paid_used(existing: Iterable[LeaveRequest], *, year: int, month: int) -> int:
        return sum(
            1
            for r in existing
            if r.holds_quota and r.is_paid and r.start_date.year == year and r.start_date.month == month
        )
