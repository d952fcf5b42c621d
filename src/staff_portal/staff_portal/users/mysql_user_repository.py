from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_SELECT_USER = """
    SELECT u.user_id, u.email, u.full_name, u.password_hash, u.is_active, u.created_at, r.role
    FROM users u
    LEFT JOIN user_roles r ON r.user_id = u.user_id
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        role=Role(row["role"]) if row.get("role") else None,
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE u.user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " WHERE u.email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_role(self, user_id: int) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, r.role
                FROM users u
                LEFT JOIN user_roles r ON r.user_id = u.user_id
                WHERE u.user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Role(row["role"]) if row.get("role") else Role.EMPLOYEE

    def create_user(self, *, email: str, password_hash: str, full_name: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO users(email, password_hash, full_name, is_active)
                    VALUES(%s,%s,%s,1)
                    """,
                    (email, password_hash, full_name),
                )
            except mysql.connector.Error as e:
                if is_duplicate_key(e):
                    raise ValidationError("A user with this email already exists")
                raise
            user_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO user_roles(user_id, role) VALUES(%s,%s)",
                (user_id, role.value),
            )
            return user_id

    def set_role(self, user_id: int, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE user_roles
                SET role=%s
                WHERE user_id=%s AND role <> 'admin'
                """,
                (role.value, int(user_id)),
            )
            if cur.rowcount > 0:
                return True
            # No role row yet; an existing admin row makes this a no-op.
            cur.execute(
                "INSERT IGNORE INTO user_roles(user_id, role) VALUES(%s,%s)",
                (int(user_id), role.value),
            )
            return cur.rowcount > 0

    def list_with_roles(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_USER + " ORDER BY u.created_at DESC, u.user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]
