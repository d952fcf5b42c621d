from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False
    in_comment = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if escape:
            buf.append(ch)
            escape = False
            prev = ch
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            prev = ch
            continue

        if ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
            prev = ""
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            prev = ch
            if stmt:
                yield stmt
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)
    logger.info("schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    apply_sql_file(db_config, path=seed_path)
    logger.info("seed applied from %s", seed_path)


def _upsert_user(cur, *, email: str, password: str, full_name: str, role: str) -> int:
    password_hash = generate_password_hash(password)
    cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
    existing = cur.fetchone()
    if existing:
        user_id = int(existing["user_id"])
        cur.execute(
            "UPDATE users SET full_name=%s, password_hash=%s, is_active=1 WHERE user_id=%s",
            (full_name, password_hash, user_id),
        )
    else:
        cur.execute(
            "INSERT INTO users (email, password_hash, full_name, is_active) VALUES (%s, %s, %s, 1)",
            (email, password_hash, full_name),
        )
        user_id = int(cur.lastrowid)

    cur.execute(
        """
        INSERT INTO user_roles (user_id, role) VALUES (%s, %s)
        ON DUPLICATE KEY UPDATE role=VALUES(role)
        """,
        (user_id, role),
    )
    # Link the employee row sharing this email, if any.
    cur.execute(
        "UPDATE employees SET user_id=%s WHERE email=%s AND (user_id IS NULL OR user_id=%s)",
        (user_id, email, user_id),
    )
    return user_id


def ensure_admin_user(db_config: dict, *, email: str, password: str, full_name: str = "Administrator") -> int:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        user_id = _upsert_user(cur, email=email.lower(), password=password, full_name=full_name, role="admin")
        conn.commit()
        logger.info("admin account ready: %s (user_id=%s)", email, user_id)
        return user_id
    finally:
        conn.close()


def ensure_demo_users(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        _upsert_user(cur, email="admin@example.com", password="admin123", full_name="Admin Demo", role="admin")
        _upsert_user(cur, email="manager@example.com", password="manager123", full_name="Maya Manager", role="manager")
        _upsert_user(cur, email="employee@example.com", password="employee123", full_name="Eli Employee", role="employee")
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
