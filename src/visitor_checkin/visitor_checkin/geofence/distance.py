from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters on a sphere of mean Earth radius.

    Inputs are decimal degrees and are not range-checked here.
    """

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    return haversine_meters(a.latitude, a.longitude, b.latitude, b.longitude)
