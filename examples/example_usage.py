"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the geofence decision lives in the services.
Usage: python examples/example_usage.py <tenant_id> <latitude> <longitude>
"""

import importlib
import sys

from config import get_settings_module

from src.visitor_checkin.visitor_checkin.container import build_container
from src.visitor_checkin.visitor_checkin.core.settings import load_settings


def main():
    tenant_id, latitude, longitude = int(sys.argv[1]), float(sys.argv[2]), float(sys.argv[3])

    settings = load_settings(importlib.import_module(get_settings_module()))
    container = build_container(settings)
    verdict = container.location_service.validate_position(tenant_id, latitude, longitude)
    print(verdict.to_dict(), verdict.distance_m)


if __name__ == "__main__":
    main()
