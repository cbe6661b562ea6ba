from __future__ import annotations

from flask import Flask, jsonify

from ..common.decorators import current_tenant_id, login_required
from ..common.http import json_body
from ..container import Container
from ..core.exceptions import InvalidCoordinate


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations", methods=["GET"], endpoint="api_locations")
    @login_required
    def list_locations():
        items = container.location_service.list_locations(current_tenant_id())
        return jsonify([loc.to_dict() for loc in items])

    @app.route("/api/locations", methods=["POST"], endpoint="api_create_location")
    @login_required
    def create_location():
        data = json_body()
        location_id = container.location_service.create_location(current_tenant_id(), data)
        return jsonify({"success": True, "message": "Location added", "id": location_id}), 201

    @app.route("/api/locations/<int:location_id>", methods=["PUT"], endpoint="api_update_location")
    @login_required
    def update_location(location_id: int):
        data = json_body()
        container.location_service.update_location(current_tenant_id(), location_id, data)
        return jsonify({"success": True, "message": "Location updated"})

    @app.route("/api/locations/<int:location_id>", methods=["DELETE"], endpoint="api_delete_location")
    @login_required
    def delete_location(location_id: int):
        container.location_service.delete_location(current_tenant_id(), location_id)
        return jsonify({"success": True, "message": "Location deleted"})

    @app.route("/api/validate-location", methods=["POST"], endpoint="api_validate_location")
    @login_required
    def validate_location():
        data = json_body(error=InvalidCoordinate)
        verdict = container.location_service.validate_position(
            current_tenant_id(), data.get("latitude"), data.get("longitude")
        )
        if verdict.within_range:
            status = 200
        elif not verdict.configured:
            status = 404
        else:
            status = 403
        return jsonify(verdict.to_dict()), status
