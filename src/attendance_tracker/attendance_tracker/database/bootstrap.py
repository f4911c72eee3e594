from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # name, email, password, role, employee_id, department
    ("Demo Manager", "manager@example.com", "manager123", Role.MANAGER, "MGR-001", "Operations"),
    ("Demo Employee", "employee@example.com", "employee123", Role.EMPLOYEE, "EMP-001", "Engineering"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal splitter for the schema file (handles ';' inside quotes, skips '--' comments).
    buf: list[str] = []
    quote = None
    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]

    for ch in "\n".join(lines):
        if quote:
            buf.append(ch)
            if ch == quote:
                quote = None
            continue

        if ch in ("'", '"'):
            quote = ch
            buf.append(ch)
            continue

        if ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with closing(factory.connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with closing(factory.connect()) as conn:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    logger.info("schema applied to %s", factory.config.describe())


def ensure_demo_users(db_config: dict) -> None:
    """Upsert the demo manager/employee accounts (keyed by email)."""
    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with closing(factory.connect()) as conn:
        cur = conn.cursor(dictionary=True)
        for name, email, password, role, employee_id, department in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, employee_id=%s, department=%s
                    WHERE email=%s
                    """,
                    (name, password_hash, role.value, employee_id, department, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (name, email, password_hash, role, employee_id, department)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (name, email, password_hash, role.value, employee_id, department),
                )
        conn.commit()
    logger.info("demo users ready (%d)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with closing(factory.connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
