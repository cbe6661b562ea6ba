from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_STATUS_NAME

DEMO_ADMIN_EMAIL = "admin@example.com"
DEMO_ADMIN_PASSWORD = "admin123"
DEMO_APPLICATION_TYPES = ("interview", "reason")


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "visitor_checkin")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_admin(db_config: dict) -> int:
    """Upsert a demo admin tenant with its default status and application types."""

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        password_hash = generate_password_hash(DEMO_ADMIN_PASSWORD)

        cur.execute("SELECT id FROM users WHERE email=%s", (DEMO_ADMIN_EMAIL,))
        existing = cur.fetchone()
        if existing:
            admin_id = int(existing["id"])
            cur.execute(
                "UPDATE users SET password=%s, role='admin', created_by=NULL WHERE id=%s",
                (password_hash, admin_id),
            )
        else:
            cur.execute(
                """
                INSERT INTO users (name, email, password, role, created_at)
                VALUES (%s, %s, %s, 'admin', NOW())
                """,
                ("Demo Admin", DEMO_ADMIN_EMAIL, password_hash),
            )
            admin_id = int(cur.lastrowid)

        cur.execute(
            "INSERT IGNORE INTO status (user_id, name, created_at) VALUES (%s, %s, NOW())",
            (admin_id, DEFAULT_STATUS_NAME),
        )
        for name in DEMO_APPLICATION_TYPES:
            cur.execute(
                "INSERT IGNORE INTO ApplicationType (user_id, name) VALUES (%s, %s)",
                (admin_id, name),
            )

        conn.commit()
        return admin_id
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
