from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, leave_type, start_date, end_date, reason,
    status, is_paid, days_count, created_at, approved_by, approved_at
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        is_paid=bool(r["is_paid"]),
        days_count=int(r["days_count"]),
        created_at=r.get("created_at"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start_from is not None:
            clauses.append("start_date >= %s")
            params.append(start_from)
        if start_to is not None:
            clauses.append("start_date <= %s")
            params.append(start_to)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY start_date DESC, leave_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus, *, limit: int = 500) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE status=%s
                ORDER BY created_at ASC, leave_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_leave(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date, reason, status, is_paid, days_count
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    LeaveStatus.PENDING.value,
                    1 if is_paid else 0,
                    int(days_count),
                ),
            )
            return int(cur.lastrowid)

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, int(approved_by), approved_at, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
