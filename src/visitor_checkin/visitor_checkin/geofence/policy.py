from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from ..core.enums import NotConfiguredPolicy
from .distance import haversine_distance
from .model import Coordinate, GeofenceOutcome, NotConfigured, RegisteredLocation, ValidationResult

logger = logging.getLogger(__name__)

Candidate = Union[Coordinate, Tuple[object, object]]


class LocationLookup(Protocol):
    def get_for_tenant(self, tenant_id: int) -> Optional[RegisteredLocation]:
        raise NotImplementedError


class GeofencePolicy:
    """Decide whether a candidate coordinate is inside a tenant's radius.

    Stateless apart from the lookup collaborator; the registered location is
    read fresh on every call.
    """

    def __init__(self, locations: LocationLookup):
        self._locations = locations

    def evaluate(self, tenant_id: int, candidate: Candidate) -> GeofenceOutcome:
        # Validate before touching storage.
        if not isinstance(candidate, Coordinate):
            lat, lon = candidate
            candidate = Coordinate.parse(lat, lon)

        location = self._locations.get_for_tenant(tenant_id)
        if location is None:
            return NotConfigured(tenant_id=tenant_id)

        distance = haversine_distance(candidate, location.center)
        within = distance <= location.radius_m
        logger.debug(
            "geofence tenant=%s distance=%.1fm radius=%.1fm within=%s",
            tenant_id, distance, location.radius_m, within,
        )
        return ValidationResult(within_range=within, distance_m=distance, radius_m=location.radius_m)


@dataclass(frozen=True)
class GeofenceVerdict:
    """What an entry point reports back: admit/deny plus a readable message."""

    within_range: bool
    configured: bool
    message: str
    distance_m: Optional[float] = None

    def to_dict(self) -> dict:
        return {"withinRange": self.within_range, "message": self.message}


def to_verdict(
    outcome: GeofenceOutcome,
    *,
    when_not_configured: NotConfiguredPolicy,
    admitted_message: str = "User within range",
) -> GeofenceVerdict:
    if isinstance(outcome, NotConfigured):
        if when_not_configured == NotConfiguredPolicy.ADMIT:
            return GeofenceVerdict(within_range=True, configured=False, message="No location set; access granted")
        return GeofenceVerdict(within_range=False, configured=False, message="No location found for user")

    if outcome.within_range:
        return GeofenceVerdict(
            within_range=True, configured=True, message=admitted_message, distance_m=outcome.distance_m
        )
    return GeofenceVerdict(
        within_range=False, configured=True, message="User not within range", distance_m=outcome.distance_m
    )
