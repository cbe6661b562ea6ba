from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from ..core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from ..core.exceptions import InvalidCoordinate


def _to_degrees(value: Any, field_name: str, *, allow_strings: bool) -> float:
    # bool is an int subclass; a JSON true must not pass as 1.0
    if value is None or isinstance(value, bool):
        raise InvalidCoordinate(f"{field_name} is required and must be a number")

    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidCoordinate(f"{field_name} must be a finite number") from None
    elif allow_strings and isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidCoordinate(f"{field_name} must be a number") from None
    else:
        raise InvalidCoordinate(f"{field_name} must be a number")

    if not math.isfinite(number):
        raise InvalidCoordinate(f"{field_name} must be a finite number")
    return number


@dataclass(frozen=True)
class Coordinate:
    """A WGS-84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude: Any, longitude: Any, *, allow_strings: bool = False) -> "Coordinate":
        """Validate raw request values and build a Coordinate.

        JSON bodies must carry real numbers; multipart forms send text, so those
        call sites pass allow_strings=True.
        """

        lat = _to_degrees(latitude, "latitude", allow_strings=allow_strings)
        lon = _to_degrees(longitude, "longitude", allow_strings=allow_strings)
        if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
            raise InvalidCoordinate("latitude must be between -90 and 90")
        if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
            raise InvalidCoordinate("longitude must be between -180 and 180")
        return cls(latitude=lat, longitude=lon)


@dataclass(frozen=True)
class RegisteredLocation:
    """A tenant's registered place: centre coordinate plus allowed radius."""

    location_id: int
    tenant_id: int
    place_name: str
    center: Coordinate
    radius_m: float
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.location_id,
            "user_id": self.tenant_id,
            "place_name": self.place_name,
            "latitude": self.center.latitude,
            "longitude": self.center.longitude,
            "distance_in_meters": self.radius_m,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class ValidationResult:
    within_range: bool
    distance_m: float
    radius_m: float


@dataclass(frozen=True)
class NotConfigured:
    """The tenant has no registered location; callers decide what that means."""

    tenant_id: int


GeofenceOutcome = Union[ValidationResult, NotConfigured]
