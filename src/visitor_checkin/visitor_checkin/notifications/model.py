from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import NotificationStatus


@dataclass(frozen=True)
class Notification:
    notification_id: int
    tenant_id: int
    type: str
    message: str
    status: NotificationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "type": self.type,
            "message": self.message,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NotificationPage:
    items: Sequence[Notification]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return (self.page - 1) * self.limit + len(self.items) < self.total

    def to_dict(self) -> dict:
        return {
            "notifications": [n.to_dict() for n in self.items],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "hasMore": self.has_more,
        }
