from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class QRCode:
    """A tenant's public QR token; scanning it opens the visitor form."""

    qr_id: int
    code: str
    tenant_id: int
    url: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.qr_id,
            "code": self.code,
            "user_id": self.tenant_id,
            "url": self.url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
