from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    GeofenceDenied,
    InvalidCoordinate,
    NotFoundError,
    StorageError,
    TenantNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (GeofenceDenied, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StorageError, 500),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("%s: %s", type(e).__name__, e)
        extra = {}
        # Geofence callers read withinRange on every failure path.
        if isinstance(e, (InvalidCoordinate, GeofenceDenied, TenantNotFound)):
            extra["withinRange"] = False
        return error_response(str(e), status, **extra)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return error_response("Internal server error", 500)


def json_body(*, error: type = ValidationError) -> dict:
    """The request's JSON object; an absent body reads as empty.

    Anything other than an object (array, scalar) is rejected with `error`.
    """

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise error("Request body must be a JSON object")
    return data
