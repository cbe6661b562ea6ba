from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import current_tenant_id, login_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notification-counter", methods=["GET"], endpoint="api_notification_counter")
    @login_required
    def notification_counter():
        count = container.notification_service.unread_count(current_tenant_id())
        return jsonify({"success": True, "count": count})

    @app.route("/api/getNotifications", methods=["GET"], endpoint="api_get_notifications")
    @login_required
    def get_notifications():
        page = container.notification_service.get_page(
            current_tenant_id(),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return jsonify({"success": True, **page.to_dict()})

    @app.route("/api/notification/status/<int:notification_id>", methods=["POST"], endpoint="api_notification_status")
    @login_required
    def set_status(notification_id: int):
        data = json_body()
        container.notification_service.set_status(current_tenant_id(), notification_id, data.get("status"))
        return jsonify({"success": True, "message": "Notification status updated"})

    @app.route("/api/notification-mark-read", methods=["PUT"], endpoint="api_notification_mark_read")
    @login_required
    def mark_all_read():
        updated = container.notification_service.mark_all_read(current_tenant_id())
        return jsonify({"success": True, "message": "All notifications marked as read", "updated": updated})
