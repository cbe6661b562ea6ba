from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or "tenant_id" not in session:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Access denied: Admins only"}), 403
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_tenant_id() -> int:
    """Admins are their own tenant; members act for the admin who created them."""
    return int(session["tenant_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.MEMBER.value))
