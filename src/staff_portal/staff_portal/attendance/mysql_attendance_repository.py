from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, as_time, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, check_in, check_out,
    status, work_hours, approved_by, approved_at, notes
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=as_time(r.get("check_in")),
        check_out=as_time(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        work_hours=as_float(r.get("work_hours")),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 31,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_status(self, status: AttendanceStatus, *, limit: int = 500) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE status=%s
                ORDER BY work_date ASC, attendance_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, check_in, status.value),
                )
            except mysql.connector.Error as e:
                # uq_attendance_employee_date
                if is_duplicate_key(e):
                    raise AlreadyCheckedIn("You have already checked in today")
                raise
            return int(cur.lastrowid)

    def close_session(self, *, attendance_id: int, check_out: time, work_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s, work_hours=%s
                WHERE attendance_id=%s AND check_in IS NOT NULL AND check_out IS NULL
                """,
                (check_out, work_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def decide(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (status.value, int(approved_by), approved_at, int(attendance_id), AttendanceStatus.PENDING.value),
            )
            return cur.rowcount > 0
