from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.decorators import admin_required, current_role, current_user_id, login_required
from ..common.http import json_body
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..container import Container
from .service import SessionUser

logger = logging.getLogger(__name__)


def _start_session(app: Flask, s_user: SessionUser, *, remember: bool) -> None:
    session.clear()
    session.permanent = remember
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    session["user_id"] = s_user.user_id
    session["name"] = s_user.name
    session["role"] = s_user.role.value
    session["tenant_id"] = s_user.tenant_id


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def refresh_session():
        # Members can be deleted while their cookie is still valid.
        if "user_id" not in session:
            return
        try:
            s_user = container.auth_service.resolve_session(int(session["user_id"]))
        except (AuthenticationError, AuthorizationError) as e:
            logger.info("Dropping session user=%s: %s", session.get("user_id"), e)
            session.clear()
            return
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["tenant_id"] = s_user.tenant_id

    @app.route("/api/signup", methods=["POST"], endpoint="api_signup")
    def signup():
        data = json_body()
        s_user = container.auth_service.signup(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
        )
        _start_session(app, s_user, remember=False)
        logger.info("Tenant admin signed up id=%s", s_user.user_id)
        return jsonify({"success": True, "message": "User registered successfully", "user": s_user.to_dict()}), 201

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email") or "", data.get("password") or "")
        _start_session(app, s_user, remember=bool(data.get("remember_me")))
        return jsonify({"success": True, "message": "Login successful", "user": s_user.to_dict()})

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/user", methods=["GET"], endpoint="api_user_profile")
    @login_required
    def profile():
        user = container.user_service.get_profile(current_user_id())
        return jsonify({"success": True, "user": user.to_public_dict()})

    @app.route("/api/user/<int:user_id>", methods=["PUT"], endpoint="api_user_update")
    @login_required
    def update_profile(user_id: int):
        data = json_body()
        container.user_service.update_profile(
            current_user_id=current_user_id(),
            user_id=user_id,
            name=data.get("name"),
            email=data.get("email"),
        )
        session["name"] = data.get("name", "").strip()
        return jsonify({"success": True, "message": "Profile updated successfully"})

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="api_change_password")
    @login_required
    def change_password():
        data = json_body()
        container.user_service.change_password(
            user_id=current_user_id(),
            current_password=data.get("currentPassword") or "",
            new_password=data.get("newPassword") or "",
            confirm_password=data.get("confirmPassword") or "",
        )
        return jsonify({"success": True, "message": "Password changed successfully"})

    @app.route("/api/create-member", methods=["POST"], endpoint="api_create_member")
    @admin_required
    def create_member():
        data = json_body()
        member = container.user_service.create_member(
            current_role=current_role(),
            admin_id=current_user_id(),
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
        )
        return jsonify({"success": True, "message": "Member created successfully", "member": member.to_public_dict()}), 201

    @app.route("/api/members", methods=["GET"], endpoint="api_members")
    @admin_required
    def list_members():
        members = container.user_service.list_members(current_role=current_role(), admin_id=current_user_id())
        return jsonify({"success": True, "members": [m.to_public_dict() for m in members]})

    @app.route("/api/members/<int:member_id>", methods=["DELETE"], endpoint="api_delete_member")
    @admin_required
    def delete_member(member_id: int):
        container.user_service.delete_member(
            current_role=current_role(), admin_id=current_user_id(), member_id=member_id
        )
        return jsonify({"success": True, "message": "Member deleted successfully"})

    @app.route("/api/members/<int:member_id>", methods=["PUT"], endpoint="api_update_member")
    @admin_required
    def update_member(member_id: int):
        data = json_body()
        container.user_service.update_member(
            current_role=current_role(),
            admin_id=current_user_id(),
            member_id=member_id,
            name=data.get("name"),
            email=data.get("email"),
        )
        return jsonify({"success": True, "message": "Member updated successfully"})
