from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: Optional[int],
        employee_code: str,
        full_name: str,
        email: str,
        department: str,
        designation: str,
        date_of_joining: date,
        phone: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, employee_id: int, fields: dict) -> bool:
        """Update the given columns (already validated by the service)."""

        raise NotImplementedError
