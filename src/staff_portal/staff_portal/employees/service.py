from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import optional_str, require_email, require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import Forbidden, NotFoundError, ValidationError
from ..users.model import Identity
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("full_name", "email", "department", "designation", "phone")
_ADMIN_ONLY_FIELDS = ("user_id", "status")


def _optional_user_id(value) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("user_id is not valid")


class EmployeeService:
    """Employee directory. Employees are never hard-deleted."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get_linked(self, actor: Identity) -> Optional[Employee]:
        """The caller's own employee record, or None when the account is not linked."""
        return self._employees.get_by_user_id(actor.user_id)

    def require_linked(self, actor: Identity) -> Employee:
        """Like get_linked, for operations that write on the caller's behalf."""
        employee = self.get_linked(actor)
        if not employee:
            raise NotFoundError("Your account is not linked to an employee record")
        return employee

    def require_owned(self, actor: Identity, employee_id: int) -> Employee:
        """Employee record the actor may act on as themselves."""
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.user_id != actor.user_id:
            raise Forbidden("You can only act on your own employee record")
        if not employee.is_active:
            raise Forbidden("Employee account is inactive")
        return employee

    def list_employees(self, actor: Identity, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        if not actor.can_approve:
            raise Forbidden("Only admin or manager can view the employee directory")
        return self._employees.list_all(status=status)

    def create_employee(
        self,
        actor: Identity,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        department: str,
        designation: str,
        date_of_joining: date,
        phone: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> Employee:
        if not actor.is_admin:
            raise Forbidden("Only admin can create employees")

        employee_id = self._employees.create(
            user_id=_optional_user_id(user_id),
            employee_code=require_non_empty(employee_code, "Employee code"),
            full_name=require_non_empty(full_name, "Full name"),
            email=require_email(email),
            department=require_non_empty(department, "Department"),
            designation=require_non_empty(designation, "Designation"),
            date_of_joining=date_of_joining,
            phone=optional_str(phone),
        )
        logger.info("user %s created employee %s (%s)", actor.user_id, employee_id, employee_code)
        return self._get(employee_id)

    def update_employee(self, actor: Identity, employee_id: int, changes: dict) -> Employee:
        if not actor.can_approve:
            raise Forbidden("Only admin or manager can edit employees")

        unknown = set(changes) - set(_PROFILE_FIELDS) - set(_ADMIN_ONLY_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if not actor.is_admin and set(changes) & set(_ADMIN_ONLY_FIELDS):
            raise Forbidden("Only admin can change the linked user or status")

        self._get(employee_id)

        fields: dict = {}
        for name in ("full_name", "department", "designation"):
            if name in changes:
                fields[name] = require_non_empty(changes[name], name.replace("_", " ").capitalize())
        if "email" in changes:
            fields["email"] = require_email(changes["email"])
        if "phone" in changes:
            fields["phone"] = optional_str(changes["phone"])
        if "user_id" in changes:
            fields["user_id"] = _optional_user_id(changes["user_id"])
        if "status" in changes:
            try:
                fields["status"] = EmployeeStatus(changes["status"])
            except ValueError:
                raise ValidationError("Status must be 'active' or 'inactive'")

        if fields:
            self._employees.update(int(employee_id), fields)
            logger.info("user %s updated employee %s: %s", actor.user_id, employee_id, ", ".join(sorted(fields)))
        return self._get(employee_id)

    def deactivate(self, actor: Identity, employee_id: int) -> Employee:
        if not actor.is_admin:
            raise Forbidden("Only admin can deactivate employees")

        employee = self._get(employee_id)
        if employee.is_active:
            self._employees.update(employee.employee_id, {"status": EmployeeStatus.INACTIVE})
            logger.info("user %s deactivated employee %s", actor.user_id, employee_id)
        return self._get(employee_id)

    def _get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee
