from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository


def _row_to_notification(row: dict) -> Notification:
    return Notification(
        notification_id=int(row["id"]),
        tenant_id=int(row["user_id"]),
        type=row["type"],
        message=row["message"],
        status=NotificationStatus(row["status"]),
        created_at=as_datetime(row.get("created_at")),
        updated_at=as_datetime(row.get("updated_at")),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, tenant_id: int, type: str, message: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO Notification (user_id, type, message, status, created_at)
                VALUES (%s, %s, %s, 'unread', NOW())
                """,
                (tenant_id, type, message),
            )
            return int(cur.lastrowid)

    def count_unread(self, tenant_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS count FROM Notification WHERE user_id=%s AND status='unread'",
                (tenant_id,),
            )
            row = fetchone(cur)
            return int(row["count"]) if row else 0

    def count_all(self, tenant_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM Notification WHERE user_id=%s", (tenant_id,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_page(self, tenant_id: int, *, limit: int, offset: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, type, message, status,
                       COALESCE(created_at, NOW()) AS created_at, updated_at
                FROM Notification
                WHERE user_id=%s
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
                """,
                (tenant_id, int(limit), int(offset)),
            )
            return [_row_to_notification(r) for r in fetchall(cur)]

    def get(self, *, tenant_id: int, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, type, message, status, created_at, updated_at
                FROM Notification
                WHERE id=%s AND user_id=%s
                """,
                (notification_id, tenant_id),
            )
            row = fetchone(cur)
            return _row_to_notification(row) if row else None

    def set_status(self, *, tenant_id: int, notification_id: int, status: NotificationStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE Notification SET status=%s, updated_at=NOW() WHERE id=%s AND user_id=%s",
                (status.value, notification_id, tenant_id),
            )
            return cur.rowcount > 0

    def mark_all_read(self, tenant_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE Notification SET status='read', updated_at=NOW() WHERE user_id=%s AND status='unread'",
                (tenant_id,),
            )
            return int(cur.rowcount)
