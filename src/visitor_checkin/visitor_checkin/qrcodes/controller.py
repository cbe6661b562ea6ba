from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.decorators import current_tenant_id, login_required
from ..common.http import json_body
from ..container import Container
from ..core.exceptions import InvalidCoordinate, ValidationError
from .service import decode_qr_image


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qrcodes", methods=["POST"], endpoint="api_create_qrcode")
    @login_required
    def create_qrcode():
        data = json_body()
        qr = container.qrcode_service.create(current_tenant_id(), code=data.get("code"), url=data.get("url"))
        return jsonify({"success": True, "message": "QR code saved", "qrcode": qr.to_dict()}), 201

    @app.route("/api/qrcodes", methods=["GET"], endpoint="api_qrcodes")
    @login_required
    def list_qrcodes():
        items = container.qrcode_service.list_for_tenant(current_tenant_id())
        return jsonify([qr.to_dict() for qr in items])

    @app.route("/api/qrcodes/user", methods=["GET"], endpoint="api_qrcode_for_user")
    @login_required
    def qrcode_for_user():
        code = container.qrcode_service.get_code_for_tenant(current_tenant_id())
        return jsonify({"success": True, "code": code})

    @app.route("/api/qrcodes/data", methods=["GET"], endpoint="api_qrcode_form_data")
    @login_required
    def form_data():
        return jsonify({"success": True, **container.catalog_service.list_all(current_tenant_id())})

    @app.route("/api/qrcodes/code/<code>", methods=["GET"], endpoint="api_qrcode_by_code")
    def qrcode_by_code(code: str):
        qr = container.qrcode_service.get_by_code(code)
        return jsonify(qr.to_dict())

    @app.route("/api/qrcodes/<code>/image", methods=["GET"], endpoint="api_qrcode_image")
    def qrcode_image(code: str):
        png = container.qrcode_service.render_png(code)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"{code}.png")

    @app.route("/api/qrcodes/decode", methods=["POST"], endpoint="api_qrcode_decode")
    def decode_qrcode():
        upload = request.files.get("image")
        if not upload or not upload.filename:
            raise ValidationError("Image file is required")
        code = decode_qr_image(upload.stream)
        return jsonify({"success": True, "code": code})

    @app.route("/api/qrcodes/<code>/location", methods=["GET"], endpoint="api_qrcode_location")
    def qrcode_location(code: str):
        return jsonify(container.qrcode_service.location_requirement(code))

    @app.route("/api/qrcodes/validate/<code>", methods=["POST"], endpoint="api_qrcode_validate")
    def validate_qrcode(code: str):
        data = json_body(error=InvalidCoordinate)
        verdict = container.qrcode_service.validate_position(code, data.get("latitude"), data.get("longitude"))
        return jsonify(verdict.to_dict()), 200 if verdict.within_range else 403

    @app.route("/api/qrcodes/<int:qr_id>", methods=["DELETE"], endpoint="api_delete_qrcode")
    @login_required
    def delete_qrcode(qr_id: int):
        container.qrcode_service.delete(current_tenant_id(), qr_id)
        return jsonify({"success": True, "message": "QR code deleted"})
