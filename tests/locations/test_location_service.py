from __future__ import annotations

import pytest

from src.visitor_checkin.visitor_checkin.core.exceptions import (
    ConflictError,
    InvalidCoordinate,
    NotFoundError,
    ValidationError,
)


def _body(**overrides):
    data = {"place_name": "HQ", "latitude": 12.9716, "longitude": 77.5946, "distance_in_meters": 500}
    data.update(overrides)
    return data


def test_create_and_list_location(container):
    svc = container.location_service

    location_id = svc.create_location(1, _body())
    items = svc.list_locations(1)

    assert [loc.location_id for loc in items] == [location_id]
    assert items[0].to_dict()["distance_in_meters"] == 500


def test_only_one_location_per_tenant(container):
    svc = container.location_service
    svc.create_location(1, _body())

    with pytest.raises(ConflictError):
        svc.create_location(1, _body(place_name="Second"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"place_name": ""},
        {"latitude": "12.97"},
        {"distance_in_meters": None},
        {"latitude": 95},
        {"distance_in_meters": -1},
    ],
)
def test_invalid_location_input_rejected(container, overrides):
    with pytest.raises(ValidationError):
        container.location_service.create_location(1, _body(**overrides))


def test_update_and_delete_require_ownership(container):
    svc = container.location_service
    location_id = svc.create_location(1, _body())

    with pytest.raises(NotFoundError):
        svc.update_location(2, location_id, _body())
    with pytest.raises(NotFoundError):
        svc.delete_location(2, location_id)

    svc.update_location(1, location_id, _body(distance_in_meters=50))
    assert svc.list_locations(1)[0].radius_m == 50
    svc.delete_location(1, location_id)
    assert svc.list_locations(1) == []


def test_direct_check_denies_when_no_location(container):
    verdict = container.location_service.validate_position(1, 12.9716, 77.5946)

    assert verdict.within_range is False
    assert verdict.configured is False
    assert verdict.message == "No location found for user"


def test_direct_check_within_and_outside(container):
    svc = container.location_service
    svc.create_location(1, _body())

    inside = svc.validate_position(1, 12.9716, 77.5990)
    outside = svc.validate_position(1, 12.98, 77.61)

    assert inside.within_range is True and inside.message == "User within range"
    assert outside.within_range is False and outside.message == "User not within range"


def test_direct_check_rejects_bad_coordinates(container):
    with pytest.raises(InvalidCoordinate):
        container.location_service.validate_position(1, None, 77.5)
