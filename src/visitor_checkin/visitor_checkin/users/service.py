from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..catalog.repository import LookupRepository
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_STATUS_NAME, MIN_PASSWORD_LENGTH
from ..core.enums import LookupKind, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    tenant_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "tenant_id": self.tenant_id,
        }


def _session_user(user: User) -> SessionUser:
    tenant_id = user.tenant_id
    if tenant_id is None:
        raise AuthorizationError("No associated admin found for this member")
    return SessionUser(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        role=user.role,
        tenant_id=int(tenant_id),
    )


class AuthService:
    """Use cases: sign up a tenant admin, log in."""

    def __init__(self, users: UserRepository, lookups: Optional[LookupRepository] = None):
        self._users = users
        self._lookups = lookups

    def signup(self, *, name: str, email: str, password: str) -> SessionUser:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("This email is already registered")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.ADMIN,
        )
        # Every submission starts in the default status, so a new tenant needs it.
        if self._lookups is not None:
            self._lookups.create(LookupKind.STATUS, tenant_id=user_id, name=DEFAULT_STATUS_NAME)

        return SessionUser(user_id=user_id, name=name, email=email, role=Role.ADMIN, tenant_id=user_id)

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise AuthenticationError("Email or password is incorrect")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Email or password is incorrect")

        return _session_user(user)

    def resolve_session(self, user_id: int) -> SessionUser:
        """Re-read the account behind a session (members may have been removed)."""
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Session is no longer valid")
        return _session_user(user)


class UserService:
    """Use cases: profile, password, members (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, *, current_user_id: int, user_id: int, name: str, email: str) -> None:
        if int(user_id) != int(current_user_id):
            raise AuthorizationError("Unauthorized or user not found")

        name = require_non_empty(name, "Name")
        email = require_email(email)

        other = self._users.get_by_email(email)
        if other and other.user_id != current_user_id:
            raise ConflictError("This email is already in use")

        if not self._users.update_profile(current_user_id, name=name, email=email):
            raise NotFoundError("User not found")

    def change_password(
        self,
        *,
        user_id: int,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        passwords = (current_password, new_password, confirm_password)
        if not all(isinstance(p, str) and p for p in passwords):
            raise ValidationError("All password fields are required")
        if new_password != confirm_password:
            raise ValidationError("New password and confirm password do not match")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)

        user = self.get_profile(user_id)
        if not check_password_hash(user.password_hash, current_password):
            raise ValidationError("Current password is incorrect")

        self._users.update_password(user_id, password_hash=generate_password_hash(new_password))

    def create_member(self, *, current_role: Role, admin_id: int, name: str, email: str, password: str) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create members")

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ConflictError("This email is already in use")

        member_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.MEMBER,
            created_by=admin_id,
        )
        return User(
            user_id=member_id,
            name=name,
            email=email,
            password_hash="",
            role=Role.MEMBER,
            created_by=admin_id,
        )

    def list_members(self, *, current_role: Role, admin_id: int) -> Sequence[User]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view members")
        return self._users.list_members(admin_id)

    def update_member(self, *, current_role: Role, admin_id: int, member_id: int, name: str, email: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit members")

        name = require_non_empty(name, "Name")
        email = require_email(email)

        other = self._users.get_by_email(email)
        if other and other.user_id != member_id:
            raise ConflictError("This email is already in use")

        if not self._users.update_member(admin_id, member_id, name=name, email=email):
            raise NotFoundError("Member not found or not authorized to edit")

    def delete_member(self, *, current_role: Role, admin_id: int, member_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete members")
        if not self._users.delete_member(admin_id, member_id):
            raise NotFoundError("Member not found or unauthorized")
