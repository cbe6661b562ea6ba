from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import MAX_LOOKUP_NAME_LENGTH
from ..core.enums import LookupKind, NotificationType
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from .model import LookupItem
from .repository import LookupRepository

_LABELS = {
    LookupKind.APPLICATION_TYPE: "Application type",
    LookupKind.DEPARTMENT: "Department",
    LookupKind.DESIGNATION: "Designation",
    LookupKind.STATUS: "Status",
}

# Application types were never announced in the feed; the other lists are.
_NOTIFY_TYPES = {
    LookupKind.DEPARTMENT: NotificationType.DEPARTMENT,
    LookupKind.DESIGNATION: NotificationType.DESIGNATION,
    LookupKind.STATUS: NotificationType.STATUS,
}


class StatusUsage(Protocol):
    def count_with_status(self, tenant_id: int, status_name: str) -> int:
        raise NotImplementedError


class CatalogService:
    """Use case: manage a tenant's lookup lists (application types, statuses, ...)."""

    def __init__(
        self,
        lookups: LookupRepository,
        notifications: Optional[NotificationService] = None,
        status_usage: Optional[StatusUsage] = None,
    ):
        self._lookups = lookups
        self._notifications = notifications
        self._status_usage = status_usage

    def _clean_name(self, kind: LookupKind, name: Optional[str]) -> str:
        label = _LABELS[kind]
        name = require_non_empty(name, f"{label} name")
        return require_max_length(name, f"{label} name", MAX_LOOKUP_NAME_LENGTH)

    def _notify(self, kind: LookupKind, tenant_id: int, message: str) -> None:
        notification_type = _NOTIFY_TYPES.get(kind)
        if notification_type and self._notifications:
            self._notifications.notify(tenant_id, notification_type, message)

    def list_items(self, kind: LookupKind, tenant_id: int) -> Sequence[LookupItem]:
        return self._lookups.list_for_tenant(kind, tenant_id)

    def list_all(self, tenant_id: int) -> Dict[str, list]:
        """Everything the QR form builder needs in one call."""
        return {
            "applicationTypes": [i.to_dict() for i in self._lookups.list_for_tenant(LookupKind.APPLICATION_TYPE, tenant_id)],
            "designations": [i.to_dict() for i in self._lookups.list_for_tenant(LookupKind.DESIGNATION, tenant_id)],
            "departments": [i.to_dict() for i in self._lookups.list_for_tenant(LookupKind.DEPARTMENT, tenant_id)],
            "statuses": [i.to_dict() for i in self._lookups.list_for_tenant(LookupKind.STATUS, tenant_id)],
        }

    def create(self, kind: LookupKind, *, tenant_id: int, name: Optional[str]) -> int:
        name = self._clean_name(kind, name)
        if self._lookups.get_by_name(kind, tenant_id=tenant_id, name=name):
            raise ValidationError(f"{_LABELS[kind]} name already exists")

        item_id = self._lookups.create(kind, tenant_id=tenant_id, name=name)
        self._notify(kind, tenant_id, f'New {_LABELS[kind].lower()} "{name}" added')
        return item_id

    def rename(self, kind: LookupKind, *, tenant_id: int, item_id: int, name: Optional[str]) -> None:
        name = self._clean_name(kind, name)
        existing = self._lookups.get_by_name(kind, tenant_id=tenant_id, name=name)
        if existing and existing.item_id != item_id:
            raise ValidationError(f"{_LABELS[kind]} name already exists")

        if not self._lookups.rename(kind, tenant_id=tenant_id, item_id=item_id, name=name):
            raise NotFoundError(f"{_LABELS[kind]} not found or unauthorized")
        self._notify(kind, tenant_id, f'{_LABELS[kind]} ID {item_id} updated to "{name}"')

    def delete(self, kind: LookupKind, *, tenant_id: int, item_id: int) -> None:
        item = self._lookups.get_by_id(kind, tenant_id=tenant_id, item_id=item_id)
        if not item:
            raise NotFoundError(f"{_LABELS[kind]} not found or unauthorized")

        if kind == LookupKind.STATUS and self._status_usage:
            if self._status_usage.count_with_status(tenant_id, item.name) > 0:
                raise ValidationError("Cannot delete status; it is used in form submissions")

        self._lookups.delete(kind, tenant_id=tenant_id, item_id=item_id)
        self._notify(kind, tenant_id, f"{_LABELS[kind]} ID {item_id} deleted")

    def require_existing(self, kind: LookupKind, *, tenant_id: int, name: str) -> LookupItem:
        item = self._lookups.get_by_name(kind, tenant_id=tenant_id, name=name)
        if not item:
            raise ValidationError(f"Invalid {_LABELS[kind].lower()}")
        return item
