from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..common.validators import require_non_empty, require_number
from ..core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from ..core.enums import NotConfiguredPolicy
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..geofence.model import Coordinate, RegisteredLocation
from ..geofence.policy import GeofencePolicy, GeofenceVerdict, to_verdict
from .repository import LocationRepository


@dataclass(frozen=True)
class LocationInput:
    place_name: str
    center: Coordinate
    radius_m: float


def parse_location_input(data: dict) -> LocationInput:
    """Validate a create/update body: all four fields, real JSON numbers."""

    place_name = data.get("place_name")
    if not isinstance(place_name, str) or not place_name.strip():
        raise ValidationError("Invalid input")
    latitude = require_number(data.get("latitude"), "latitude")
    longitude = require_number(data.get("longitude"), "longitude")
    radius = require_number(data.get("distance_in_meters"), "distance_in_meters")

    if not (MIN_LATITUDE <= latitude <= MAX_LATITUDE and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE) or radius < 0:
        raise ValidationError("Invalid coordinates or distance")

    return LocationInput(
        place_name=require_non_empty(place_name, "place_name"),
        center=Coordinate(latitude=latitude, longitude=longitude),
        radius_m=radius,
    )


class LocationService:
    """Use cases: manage the tenant's registered location, direct position check."""

    def __init__(self, locations: LocationRepository, policy: GeofencePolicy):
        self._locations = locations
        self._policy = policy

    def list_locations(self, tenant_id: int) -> Sequence[RegisteredLocation]:
        return self._locations.list_for_tenant(tenant_id)

    def create_location(self, tenant_id: int, data: dict) -> int:
        payload = parse_location_input(data)
        if self._locations.get_for_tenant(tenant_id):
            raise ConflictError("Only one location allowed per user")
        return self._locations.create(
            tenant_id=tenant_id,
            place_name=payload.place_name,
            center=payload.center,
            radius_m=payload.radius_m,
        )

    def update_location(self, tenant_id: int, location_id: int, data: dict) -> None:
        payload = parse_location_input(data)
        ok = self._locations.update(
            location_id=location_id,
            tenant_id=tenant_id,
            place_name=payload.place_name,
            center=payload.center,
            radius_m=payload.radius_m,
        )
        if not ok:
            raise NotFoundError("Location not found or unauthorized")

    def delete_location(self, tenant_id: int, location_id: int) -> None:
        if not self._locations.delete(location_id=location_id, tenant_id=tenant_id):
            raise NotFoundError("Location not found or unauthorized")

    def validate_position(self, tenant_id: int, latitude: Any, longitude: Any) -> GeofenceVerdict:
        """Direct check for a signed-in tenant.

        A tenant validating its own position without having registered a
        location gets a denial: there is nothing to be inside of.
        """

        candidate = Coordinate.parse(latitude, longitude)
        outcome = self._policy.evaluate(tenant_id, candidate)
        return to_verdict(outcome, when_not_configured=NotConfiguredPolicy.DENY)
