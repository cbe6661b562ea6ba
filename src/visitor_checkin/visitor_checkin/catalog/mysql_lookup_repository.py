from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LookupKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import LookupItem
from .repository import LookupRepository

# Table names come from this map only, never from request input.
_TABLES = {
    LookupKind.APPLICATION_TYPE: "ApplicationType",
    LookupKind.DEPARTMENT: "department",
    LookupKind.DESIGNATION: "designation",
    LookupKind.STATUS: "status",
}


def _has_created_at(kind: LookupKind) -> bool:
    return kind == LookupKind.STATUS


class MySQLLookupRepository(LookupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _columns(self, kind: LookupKind) -> str:
        return "id, user_id, name, created_at" if _has_created_at(kind) else "id, user_id, name"

    def _to_item(self, kind: LookupKind, row: dict) -> LookupItem:
        return LookupItem(
            item_id=int(row["id"]),
            tenant_id=int(row["user_id"]),
            kind=kind,
            name=row["name"],
            created_at=as_datetime(row.get("created_at")),
        )

    def list_for_tenant(self, kind: LookupKind, tenant_id: int) -> Sequence[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {self._columns(kind)} FROM {_TABLES[kind]} WHERE user_id=%s ORDER BY id",
                (tenant_id,),
            )
            return [self._to_item(kind, r) for r in fetchall(cur)]

    def get_by_id(self, kind: LookupKind, *, tenant_id: int, item_id: int) -> Optional[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {self._columns(kind)} FROM {_TABLES[kind]} WHERE id=%s AND user_id=%s",
                (item_id, tenant_id),
            )
            row = fetchone(cur)
            return self._to_item(kind, row) if row else None

    def get_by_name(self, kind: LookupKind, *, tenant_id: int, name: str) -> Optional[LookupItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {self._columns(kind)} FROM {_TABLES[kind]} WHERE name=%s AND user_id=%s",
                (name, tenant_id),
            )
            row = fetchone(cur)
            return self._to_item(kind, row) if row else None

    def create(self, kind: LookupKind, *, tenant_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if _has_created_at(kind):
                cur.execute(
                    f"INSERT INTO {_TABLES[kind]} (user_id, name, created_at) VALUES (%s, %s, NOW())",
                    (tenant_id, name),
                )
            else:
                cur.execute(
                    f"INSERT INTO {_TABLES[kind]} (user_id, name) VALUES (%s, %s)",
                    (tenant_id, name),
                )
            return int(cur.lastrowid)

    def rename(self, kind: LookupKind, *, tenant_id: int, item_id: int, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {_TABLES[kind]} SET name=%s WHERE id=%s AND user_id=%s",
                (name, item_id, tenant_id),
            )
            return cur.rowcount > 0

    def delete(self, kind: LookupKind, *, tenant_id: int, item_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM {_TABLES[kind]} WHERE id=%s AND user_id=%s",
                (item_id, tenant_id),
            )
            return cur.rowcount > 0
