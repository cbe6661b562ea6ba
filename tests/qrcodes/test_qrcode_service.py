from __future__ import annotations

import pytest

from src.visitor_checkin.visitor_checkin.core.exceptions import (
    ConflictError,
    InvalidCoordinate,
    NotFoundError,
    TenantNotFound,
    ValidationError,
)


def test_create_builds_public_url(container):
    qr = container.qrcode_service.create(1, code="front-desk")

    assert qr.code == "front-desk"
    assert qr.url == "http://testserver/form/front-desk"
    assert container.qrcode_service.get_code_for_tenant(1) == "front-desk"


def test_create_generates_code_when_missing(container):
    qr = container.qrcode_service.create(1)

    assert len(qr.code) >= 4
    assert container.qrcode_service.get_by_code(qr.code).tenant_id == 1


def test_duplicate_code_and_second_code_rejected(container):
    svc = container.qrcode_service
    svc.create(1, code="front-desk")

    with pytest.raises(ConflictError, match="Code already exists"):
        svc.create(2, code="front-desk")
    with pytest.raises(ConflictError, match="already has a QR code"):
        svc.create(1, code="back-door")


def test_invalid_code_rejected(container):
    with pytest.raises(ValidationError):
        container.qrcode_service.create(1, code="a b")


@pytest.mark.parametrize("code, url", [(12345, None), ("front-desk", ["http://x"])])
def test_non_string_code_or_url_rejected(container, code, url):
    with pytest.raises(ValidationError):
        container.qrcode_service.create(1, code=code, url=url)


def test_unknown_code_is_tenant_not_found(container):
    with pytest.raises(TenantNotFound):
        container.qrcode_service.get_by_code("missing")
    with pytest.raises(NotFoundError):
        container.qrcode_service.get_code_for_tenant(1)


def test_delete_requires_ownership(container):
    qr = container.qrcode_service.create(1, code="front-desk")

    with pytest.raises(NotFoundError):
        container.qrcode_service.delete(2, qr.qr_id)
    container.qrcode_service.delete(1, qr.qr_id)
    assert container.qrcode_service.list_for_tenant(1) == []


def test_location_requirement(container, repos):
    container.qrcode_service.create(1, code="front-desk")
    assert container.qrcode_service.location_requirement("front-desk") == {"required": False, "place_name": None}

    repos.locations.add(1, 12.9716, 77.5946, radius_m=500, place_name="HQ")
    assert container.qrcode_service.location_requirement("front-desk") == {"required": True, "place_name": "HQ"}


def test_qr_check_admits_when_no_location(container):
    container.qrcode_service.create(1, code="front-desk")

    verdict = container.qrcode_service.validate_position("front-desk", 12.9716, 77.5946)

    assert verdict.within_range is True
    assert verdict.configured is False
    assert verdict.message == "No location set; access granted"


def test_qr_check_uses_tenant_geofence(container, repos):
    container.qrcode_service.create(1, code="front-desk")
    repos.locations.add(1, 12.9716, 77.5946, radius_m=500)

    inside = container.qrcode_service.validate_position("front-desk", 12.9716, 77.5990)
    outside = container.qrcode_service.validate_position("front-desk", 12.98, 77.61)

    assert inside.within_range is True
    assert inside.message == "Valid QR code and within range"
    assert outside.within_range is False


def test_qr_check_validates_coordinates_before_code(container):
    with pytest.raises(InvalidCoordinate):
        container.qrcode_service.validate_position("missing", 91, 0)


def test_render_png(container):
    container.qrcode_service.create(1, code="front-desk")

    png = container.qrcode_service.render_png("front-desk")

    assert png.startswith(b"\x89PNG")
