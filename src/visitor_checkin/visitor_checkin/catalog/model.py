from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LookupKind


@dataclass(frozen=True)
class LookupItem:
    """A named entry in one of a tenant's lookup lists (status, department, ...)."""

    item_id: int
    tenant_id: int
    kind: LookupKind
    name: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {"id": self.item_id, "name": self.name, "user_id": self.tenant_id}
        if self.created_at is not None:
            data["created_at"] = self.created_at.isoformat()
        return data
