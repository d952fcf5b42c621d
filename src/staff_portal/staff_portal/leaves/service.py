from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import month_bounds, now_local
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import Forbidden, NotFoundError, PolicyViolation
from ..employees.service import EmployeeService
from ..users.model import Identity
from .model import LeaveBalance, LeaveRequest
from .policy import LeavePolicy
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeService, *, policy: LeavePolicy | None = None):
        self._leaves = leaves
        self._employees = employees
        self._policy = policy or LeavePolicy()

    @property
    def policy(self) -> LeavePolicy:
        return self._policy

    def submit(
        self,
        actor: Identity,
        employee_id: int,
        *,
        leave_type: Union[LeaveType, str, None],
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str],
        now: datetime | None = None,
    ) -> LeaveRequest:
        now = now or now_local()

        draft = self._policy.validate(leave_type=leave_type, start_date=start_date, end_date=end_date, reason=reason)
        employee = self._employees.require_owned(actor, employee_id)

        window_from, window_to = self._policy.lookup_window(draft.start_date)
        # Read-then-insert is not atomic; two simultaneous submissions can both pass.
        existing = self._leaves.list_for_employee(
            employee.employee_id,
            start_from=window_from,
            start_to=window_to,
            limit=DEFAULT_LIST_LIMIT,
        )
        try:
            self._policy.check(draft, existing, today=now.date())
        except PolicyViolation as e:
            logger.info("leave request by employee %s rejected: %s", employee.employee_id, e)
            raise

        leave_id = self._leaves.create(
            employee_id=employee.employee_id,
            leave_type=draft.leave_type,
            start_date=draft.start_date,
            end_date=draft.end_date,
            reason=draft.reason,
            is_paid=draft.is_paid,
            days_count=draft.days_count,
        )
        logger.info(
            "employee %s requested %s leave %s..%s (%d days)",
            employee.employee_id,
            draft.leave_type.value,
            draft.start_date,
            draft.end_date,
            draft.days_count,
        )
        return self._get(leave_id)

    def history(
        self,
        actor: Identity,
        employee_id: int,
        *,
        month: Optional[tuple[int, int]] = None,
    ) -> Sequence[LeaveRequest]:
        employee = self._employees.require_owned(actor, employee_id)
        start = end = None
        if month:
            start, end = month_bounds(*month)
        return self._leaves.list_for_employee(employee.employee_id, start_from=start, start_to=end, limit=DEFAULT_LIST_LIMIT)

    def balance(self, actor: Identity, employee_id: int, *, month: tuple[int, int]) -> LeaveBalance:
        year, mon = month
        requests = [r for r in self.history(actor, employee_id, month=month) if r.holds_quota]
        return LeaveBalance(
            year=year,
            month=mon,
            paid_quota=self._policy.monthly_paid_quota,
            paid_used=LeavePolicy.paid_used(requests, year=year, month=mon),
            unpaid_requested=sum(1 for r in requests if not r.is_paid),
        )

    def pending(self, actor: Identity, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        if not actor.can_approve:
            raise Forbidden("Only admin or manager can review leave requests")
        return self._leaves.list_by_status(LeaveStatus.PENDING, limit=limit)

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave
