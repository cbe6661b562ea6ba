from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import QRCode
from .repository import QRCodeRepository


def _row_to_qrcode(row: dict) -> QRCode:
    return QRCode(
        qr_id=int(row["id"]),
        code=row["code"],
        tenant_id=int(row["user_id"]),
        url=row["url"],
        created_at=as_datetime(row.get("created_at")),
    )


class MySQLQRCodeRepository(QRCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[QRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, code, user_id, url, created_at FROM qrcodes WHERE code=%s", (code,))
            row = fetchone(cur)
            return _row_to_qrcode(row) if row else None

    def get_for_tenant(self, tenant_id: int) -> Optional[QRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, code, user_id, url, created_at FROM qrcodes WHERE user_id=%s ORDER BY id LIMIT 1",
                (tenant_id,),
            )
            row = fetchone(cur)
            return _row_to_qrcode(row) if row else None

    def list_for_tenant(self, tenant_id: int) -> Sequence[QRCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, code, user_id, url, created_at
                FROM qrcodes
                WHERE user_id=%s
                ORDER BY created_at DESC
                """,
                (tenant_id,),
            )
            return [_row_to_qrcode(r) for r in fetchall(cur)]

    def create(self, *, tenant_id: int, code: str, url: str) -> int:
        with db_cursor(self._conn_factory, conflict_message="QR code already exists for this code or user") as (_, cur):
            cur.execute(
                "INSERT INTO qrcodes (code, user_id, url, created_at) VALUES (%s, %s, %s, NOW())",
                (code, tenant_id, url),
            )
            return int(cur.lastrowid)

    def delete(self, *, qr_id: int, tenant_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM qrcodes WHERE id=%s AND user_id=%s", (qr_id, tenant_id))
            return cur.rowcount > 0
