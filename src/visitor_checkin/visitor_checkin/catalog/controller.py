from __future__ import annotations

from flask import Flask, jsonify

from ..common.decorators import current_tenant_id, login_required
from ..common.http import json_body
from ..container import Container
from ..core.enums import LookupKind

# URL prefix per lookup list, kept as the dashboard already calls them.
_ROUTES = {
    LookupKind.APPLICATION_TYPE: "/api/applicationtype",
    LookupKind.DEPARTMENT: "/api/department",
    LookupKind.DESIGNATION: "/api/designation",
    LookupKind.STATUS: "/api/status",
}


def _register_kind(app: Flask, container: Container, kind: LookupKind, prefix: str) -> None:
    name = kind.value

    @login_required
    def list_items():
        items = container.catalog_service.list_items(kind, current_tenant_id())
        return jsonify({"success": True, "data": [i.to_dict() for i in items]})

    @login_required
    def create_item():
        data = json_body()
        item_id = container.catalog_service.create(kind, tenant_id=current_tenant_id(), name=data.get("name"))
        return jsonify({"success": True, "message": "Created successfully", "id": item_id}), 201

    @login_required
    def rename_item(item_id: int):
        data = json_body()
        container.catalog_service.rename(kind, tenant_id=current_tenant_id(), item_id=item_id, name=data.get("name"))
        return jsonify({"success": True, "message": "Updated successfully"})

    @login_required
    def delete_item(item_id: int):
        container.catalog_service.delete(kind, tenant_id=current_tenant_id(), item_id=item_id)
        return jsonify({"success": True, "message": "Deleted successfully"})

    app.add_url_rule(prefix, endpoint=f"api_{name}_list", view_func=list_items, methods=["GET"])
    app.add_url_rule(prefix, endpoint=f"api_{name}_create", view_func=create_item, methods=["POST"])
    app.add_url_rule(f"{prefix}/<int:item_id>", endpoint=f"api_{name}_rename", view_func=rename_item, methods=["PUT"])
    app.add_url_rule(f"{prefix}/<int:item_id>", endpoint=f"api_{name}_delete", view_func=delete_item, methods=["DELETE"])


def register(app: Flask, container: Container) -> None:
    for kind, prefix in _ROUTES.items():
        _register_kind(app, container, kind, prefix)
