"""JSON-document-backed implementation of DeliveryPointRepository."""

from __future__ import annotations

from agromarket.domain.model.delivery_point import DeliveryPoint
from agromarket.domain.model.value_objects import Coordinates
from agromarket.domain.repository.delivery_point_repository import (
    DeliveryPointRepository,
)
from agromarket.infrastructure.persistence import records


class JsonDeliveryPointRepository(DeliveryPointRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def get_by_id(self, point_id: str) -> DeliveryPoint | None:
        raw = records.find(self._rows, point_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(
        self,
        farmer_id: str | None = None,
        zone: str | None = None,
        active_only: bool = False,
    ) -> list[DeliveryPoint]:
        points = [self._to_domain(raw) for raw in self._rows]
        if farmer_id is not None:
            points = [p for p in points if p.farmer_id == farmer_id]
        if zone is not None:
            points = [p for p in points if p.zone.lower() == zone.strip().lower()]
        if active_only:
            points = [p for p in points if p.active]
        return records.newest_first(points)

    def save(self, point: DeliveryPoint) -> None:
        records.upsert(self._rows, self._to_raw(point))

    def delete(self, point_id: str) -> None:
        records.remove(self._rows, point_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(point: DeliveryPoint) -> dict:
        coordinates = point.coordinates
        return {
            "id": point.id,
            "farmer_id": point.farmer_id,
            "name": point.name,
            "address": point.address,
            "zone": point.zone,
            "latitude": coordinates.latitude if coordinates else None,
            "longitude": coordinates.longitude if coordinates else None,
            "active": point.active,
            "created_at": point.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> DeliveryPoint:
        return DeliveryPoint(
            id=raw["id"],
            farmer_id=raw["farmer_id"],
            name=raw["name"],
            address=raw.get("address"),
            zone=raw["zone"],
            coordinates=Coordinates.of(raw.get("latitude"), raw.get("longitude")),
            active=raw.get("active", True),
            created_at=records.parse_timestamp(raw["created_at"]),
        )
