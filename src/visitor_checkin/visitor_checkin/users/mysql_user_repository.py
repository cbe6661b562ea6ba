from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, name, email, password, role, created_by, created_at, updated_at"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password"],
        role=Role(row["role"]),
        created_by=row.get("created_by"),
        created_at=as_datetime(row.get("created_at")),
        updated_at=as_datetime(row.get("updated_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory, conflict_message="This email is already registered") as (_, cur):
            cur.execute(
                """
                INSERT INTO users (name, email, password, role, created_by, created_at)
                VALUES (%s, %s, %s, %s, %s, NOW())
                """,
                (name, email, password_hash, role.value, created_by),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        with db_cursor(self._conn_factory, conflict_message="This email is already in use") as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, email=%s, updated_at=NOW() WHERE id=%s",
                (name, email, user_id),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET password=%s, updated_at=NOW() WHERE id=%s",
                (password_hash, user_id),
            )
            return cur.rowcount > 0

    def list_members(self, admin_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE created_by=%s AND role='member'
                ORDER BY created_at DESC
                """,
                (admin_id,),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def update_member(self, admin_id: int, member_id: int, *, name: str, email: str) -> bool:
        with db_cursor(self._conn_factory, conflict_message="This email is already in use") as (_, cur):
            cur.execute(
                """
                UPDATE users SET name=%s, email=%s, updated_at=NOW()
                WHERE id=%s AND created_by=%s AND role='member'
                """,
                (name, email, member_id, admin_id),
            )
            return cur.rowcount > 0

    def delete_member(self, admin_id: int, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM users WHERE id=%s AND created_by=%s AND role='member'",
                (member_id, admin_id),
            )
            return cur.rowcount > 0
