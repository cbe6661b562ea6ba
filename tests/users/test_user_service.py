from __future__ import annotations

import pytest

from src.visitor_checkin.visitor_checkin.core.enums import LookupKind, Role
from src.visitor_checkin.visitor_checkin.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_signup_creates_admin_tenant_with_default_status(container, repos):
    s_user = container.auth_service.signup(name="Admin", email="Admin@Example.com", password="secret123")

    assert s_user.role == Role.ADMIN
    assert s_user.tenant_id == s_user.user_id
    assert s_user.email == "admin@example.com"
    statuses = repos.lookups.list_for_tenant(LookupKind.STATUS, s_user.user_id)
    assert [s.name for s in statuses] == ["pending"]


@pytest.mark.parametrize(
    "name, email, password",
    [("", "a@example.com", "secret123"), ("A", "not-an-email", "secret123"), ("A", "a@example.com", "123")],
)
def test_signup_validation(container, name, email, password):
    with pytest.raises(ValidationError):
        container.auth_service.signup(name=name, email=email, password=password)


def test_signup_duplicate_email(container, admin):
    with pytest.raises(ConflictError):
        container.auth_service.signup(name="Other", email="admin@example.com", password="secret123")


def test_authenticate(container, admin):
    assert container.auth_service.authenticate("admin@example.com", "secret123").user_id == admin.user_id

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("admin@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody@example.com", "secret123")


def test_member_acts_for_creating_admin(container, admin):
    member = container.user_service.create_member(
        current_role=Role.ADMIN, admin_id=admin.user_id, name="Member", email="m@example.com", password="secret123"
    )

    s_member = container.auth_service.authenticate("m@example.com", "secret123")

    assert s_member.role == Role.MEMBER
    assert s_member.tenant_id == admin.user_id
    assert [m.user_id for m in container.user_service.list_members(current_role=Role.ADMIN, admin_id=admin.user_id)] == [
        member.user_id
    ]


def test_member_without_admin_is_forbidden(container, repos):
    repos.users.create_user(name="Orphan", email="o@example.com", password_hash="x", role=Role.MEMBER)

    with pytest.raises(AuthorizationError):
        container.auth_service.resolve_session(1)


def test_member_management_is_admin_only(container, admin):
    with pytest.raises(AuthorizationError):
        container.user_service.create_member(
            current_role=Role.MEMBER, admin_id=admin.user_id, name="X", email="x@example.com", password="secret123"
        )
    with pytest.raises(NotFoundError):
        container.user_service.delete_member(current_role=Role.ADMIN, admin_id=admin.user_id, member_id=999)


def test_update_profile_only_own_account(container, admin):
    with pytest.raises(AuthorizationError):
        container.user_service.update_profile(current_user_id=admin.user_id, user_id=99, name="X", email="x@example.com")

    container.user_service.update_profile(
        current_user_id=admin.user_id, user_id=admin.user_id, name="Renamed", email="new@example.com"
    )
    assert container.user_service.get_profile(admin.user_id).name == "Renamed"


def test_change_password(container, admin):
    svc = container.user_service

    with pytest.raises(ValidationError, match="do not match"):
        svc.change_password(user_id=admin.user_id, current_password="secret123", new_password="abcdef", confirm_password="abcdeg")
    with pytest.raises(ValidationError, match="incorrect"):
        svc.change_password(user_id=admin.user_id, current_password="nope", new_password="abcdef", confirm_password="abcdef")

    svc.change_password(user_id=admin.user_id, current_password="secret123", new_password="abcdef", confirm_password="abcdef")
    assert container.auth_service.authenticate("admin@example.com", "abcdef").user_id == admin.user_id


def test_update_member_scoped_to_creating_admin(container, admin):
    svc = container.user_service
    member = svc.create_member(
        current_role=Role.ADMIN, admin_id=admin.user_id, name="M", email="m@example.com", password="secret123"
    )
    other = container.auth_service.signup(name="Other", email="other@example.com", password="secret123")

    with pytest.raises(AuthorizationError):
        svc.update_member(current_role=Role.MEMBER, admin_id=admin.user_id, member_id=member.user_id, name="X", email="x@example.com")
    with pytest.raises(NotFoundError):
        svc.update_member(current_role=Role.ADMIN, admin_id=other.user_id, member_id=member.user_id, name="X", email="x@example.com")
    with pytest.raises(ConflictError):
        svc.update_member(current_role=Role.ADMIN, admin_id=admin.user_id, member_id=member.user_id, name="X", email="other@example.com")

    svc.update_member(current_role=Role.ADMIN, admin_id=admin.user_id, member_id=member.user_id, name="Mia", email="Mia@Example.com")
    updated = svc.get_profile(member.user_id)
    assert (updated.name, updated.email) == ("Mia", "mia@example.com")


@pytest.mark.parametrize("email, password", [(5, "secret123"), ("admin@example.com", ["secret123"])])
def test_authenticate_rejects_non_string_credentials(container, admin, email, password):
    with pytest.raises(ValidationError):
        container.auth_service.authenticate(email, password)


def test_signup_rejects_numeric_password(container):
    with pytest.raises(ValidationError):
        container.auth_service.signup(name="A", email="a@example.com", password=12345678)
