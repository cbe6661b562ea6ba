from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Admins own a tenant (their own id); members act on behalf of the admin
    that created them.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def tenant_id(self) -> Optional[int]:
        if self.role == Role.MEMBER:
            return self.created_by
        return self.user_id

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
