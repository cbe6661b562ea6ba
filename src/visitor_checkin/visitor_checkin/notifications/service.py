from __future__ import annotations

from typing import Any, Optional

from ..core.constants import DEFAULT_NOTIFICATION_PAGE_SIZE, MAX_NOTIFICATION_PAGE_SIZE
from ..core.enums import NotificationStatus, NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from .model import NotificationPage
from .repository import NotificationRepository


def _positive_int(value: Any, field_name: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


class NotificationService:
    """Use case: the admin dashboard's notification feed."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(self, tenant_id: int, type: NotificationType, message: str) -> int:
        return self._notifications.create(tenant_id=tenant_id, type=type.value, message=message)

    def unread_count(self, tenant_id: int) -> int:
        return self._notifications.count_unread(tenant_id)

    def get_page(self, tenant_id: int, *, page: Optional[Any] = None, limit: Optional[Any] = None) -> NotificationPage:
        page_n = _positive_int(page, "Page", 1)
        limit_n = _positive_int(limit, "Limit", DEFAULT_NOTIFICATION_PAGE_SIZE)
        if limit_n > MAX_NOTIFICATION_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_NOTIFICATION_PAGE_SIZE}")

        offset = (page_n - 1) * limit_n
        items = self._notifications.list_page(tenant_id, limit=limit_n, offset=offset)
        total = self._notifications.count_all(tenant_id)
        return NotificationPage(items=list(items), total=total, page=page_n, limit=limit_n)

    def set_status(self, tenant_id: int, notification_id: int, status: Any) -> None:
        try:
            new_status = NotificationStatus(status)
        except ValueError:
            raise ValidationError('Status must be either "read" or "unread"') from None

        if not self._notifications.get(tenant_id=tenant_id, notification_id=notification_id):
            raise NotFoundError("Notification not found or unauthorized")

        self._notifications.set_status(tenant_id=tenant_id, notification_id=notification_id, status=new_status)

    def mark_all_read(self, tenant_id: int) -> int:
        return self._notifications.mark_all_read(tenant_id)
