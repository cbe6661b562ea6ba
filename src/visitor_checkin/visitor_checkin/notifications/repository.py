from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationStatus
from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, tenant_id: int, type: str, message: str) -> int:
        raise NotImplementedError

    def count_unread(self, tenant_id: int) -> int:
        raise NotImplementedError

    def count_all(self, tenant_id: int) -> int:
        raise NotImplementedError

    def list_page(self, tenant_id: int, *, limit: int, offset: int) -> Sequence[Notification]:
        raise NotImplementedError

    def get(self, *, tenant_id: int, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def set_status(self, *, tenant_id: int, notification_id: int, status: NotificationStatus) -> bool:
        raise NotImplementedError

    def mark_all_read(self, tenant_id: int) -> int:
        raise NotImplementedError
