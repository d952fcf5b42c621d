from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee, optionally linked to a login."""

    employee_id: int
    user_id: Optional[int]
    employee_code: str
    full_name: str
    email: str
    department: str
    designation: str
    status: EmployeeStatus
    date_of_joining: date
    phone: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "user_id": self.user_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "email": self.email,
            "department": self.department,
            "designation": self.designation,
            "phone": self.phone,
            "status": self.status.value,
            "date_of_joining": self.date_of_joining.isoformat(),
        }
