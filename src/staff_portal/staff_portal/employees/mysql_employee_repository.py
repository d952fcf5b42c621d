from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import EmployeeStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, user_id, employee_code, full_name, email,
    department, designation, phone, status, date_of_joining
"""

# Columns the service may change through update().
UPDATABLE_COLUMNS = ("user_id", "full_name", "email", "department", "designation", "phone", "status")


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
        employee_code=r["employee_code"],
        full_name=r["full_name"],
        email=r["email"],
        department=r["department"],
        designation=r["designation"],
        status=EmployeeStatus(r["status"]),
        date_of_joining=r["date_of_joining"],
        phone=r.get("phone"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        where = ""
        params: tuple = ()
        if status is not None:
            where = "WHERE status=%s"
            params = (status.value,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY employee_code", params)
            return [_to_employee(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO employees(
                        user_id, employee_code, full_name, email, department,
                        designation, phone, status, date_of_joining
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user_id,
                        employee_code,
                        full_name,
                        email,
                        department,
                        designation,
                        phone,
                        EmployeeStatus.ACTIVE.value,
                        date_of_joining,
                    ),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ValidationError("Employee code or linked user already in use")
                raise
            return int(cur.lastrowid)

    def update(self, employee_id: int, fields: dict) -> bool:
        cols = [c for c in UPDATABLE_COLUMNS if c in fields]
        if not cols:
            return False

        values = [fields[c].value if isinstance(fields[c], EmployeeStatus) else fields[c] for c in cols]
        assignments = ", ".join(f"{c}=%s" for c in cols)

        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                    tuple(values + [int(employee_id)]),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ValidationError("Linked user already belongs to another employee")
                raise
            return cur.rowcount > 0
