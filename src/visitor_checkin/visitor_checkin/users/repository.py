from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for accounts.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def list_members(self, admin_id: int) -> Sequence[User]:
        raise NotImplementedError

    def update_member(self, admin_id: int, member_id: int, *, name: str, email: str) -> bool:
        raise NotImplementedError

    def delete_member(self, admin_id: int, member_id: int) -> bool:
        raise NotImplementedError
