from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..geofence.model import Coordinate, RegisteredLocation


class LocationRepository(Protocol):
    """Location registry: at most one registered location per tenant."""

    def get_for_tenant(self, tenant_id: int) -> Optional[RegisteredLocation]:
        raise NotImplementedError

    def list_for_tenant(self, tenant_id: int) -> Sequence[RegisteredLocation]:
        raise NotImplementedError

    def create(self, *, tenant_id: int, place_name: str, center: Coordinate, radius_m: float) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        location_id: int,
        tenant_id: int,
        place_name: str,
        center: Coordinate,
        radius_m: float,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, location_id: int, tenant_id: int) -> bool:
        raise NotImplementedError
