"""JSON-document-backed implementation of FarmerRepository."""

from __future__ import annotations

from agromarket.domain.model.delivery_point import Farmer
from agromarket.domain.repository.delivery_point_repository import FarmerRepository
from agromarket.infrastructure.persistence import records


class JsonFarmerRepository(FarmerRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def get_by_id(self, farmer_id: str) -> Farmer | None:
        raw = records.find(self._rows, farmer_id)
        if raw is None:
            return None
        return Farmer(id=raw["id"], name=raw["name"], email=raw.get("email"))

    def list_all(self) -> list[Farmer]:
        farmers = [
            Farmer(id=raw["id"], name=raw["name"], email=raw.get("email"))
            for raw in self._rows
        ]
        return sorted(farmers, key=lambda f: f.name.lower())

    def save(self, farmer: Farmer) -> None:
        records.upsert(
            self._rows,
            {"id": farmer.id, "name": farmer.name, "email": farmer.email},
        )
