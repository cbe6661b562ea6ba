from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, as_float, db_cursor, fetchall, fetchone
from ..geofence.model import Coordinate, RegisteredLocation
from .repository import LocationRepository


def _row_to_location(row: dict) -> RegisteredLocation:
    return RegisteredLocation(
        location_id=int(row["id"]),
        tenant_id=int(row["user_id"]),
        place_name=row["place_name"],
        center=Coordinate(latitude=as_float(row["latitude"]), longitude=as_float(row["longitude"])),
        radius_m=as_float(row["distance_in_meters"]),
        created_at=as_datetime(row.get("created_at")),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_tenant(self, tenant_id: int) -> Optional[RegisteredLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, place_name, latitude, longitude, distance_in_meters, created_at
                FROM LocationCoordinates
                WHERE user_id=%s
                ORDER BY id
                LIMIT 1
                """,
                (tenant_id,),
            )
            row = fetchone(cur)
            return _row_to_location(row) if row else None

    def list_for_tenant(self, tenant_id: int) -> Sequence[RegisteredLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, user_id, place_name, latitude, longitude, distance_in_meters, created_at
                FROM LocationCoordinates
                WHERE user_id=%s
                ORDER BY id
                """,
                (tenant_id,),
            )
            return [_row_to_location(r) for r in fetchall(cur)]

    def create(self, *, tenant_id: int, place_name: str, center: Coordinate, radius_m: float) -> int:
        with db_cursor(self._conn_factory, conflict_message="Only one location allowed per user") as (_, cur):
            cur.execute(
                """
                INSERT INTO LocationCoordinates (user_id, place_name, latitude, longitude, distance_in_meters, created_at)
                VALUES (%s, %s, %s, %s, %s, NOW())
                """,
                (tenant_id, place_name, center.latitude, center.longitude, radius_m),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        location_id: int,
        tenant_id: int,
        place_name: str,
        center: Coordinate,
        radius_m: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE LocationCoordinates
                SET place_name=%s, latitude=%s, longitude=%s, distance_in_meters=%s
                WHERE id=%s AND user_id=%s
                """,
                (place_name, center.latitude, center.longitude, radius_m, location_id, tenant_id),
            )
            # rowcount is 0 when values are unchanged, so confirm ownership separately.
            if cur.rowcount > 0:
                return True
            cur.execute(
                "SELECT id FROM LocationCoordinates WHERE id=%s AND user_id=%s",
                (location_id, tenant_id),
            )
            return fetchone(cur) is not None

    def delete(self, *, location_id: int, tenant_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM LocationCoordinates WHERE id=%s AND user_id=%s",
                (location_id, tenant_id),
            )
            return cur.rowcount > 0
