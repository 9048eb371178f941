"""JSON-document-backed implementation of ProductRepository."""

from __future__ import annotations

from agromarket.domain.model.availability import AvailabilityTier
from agromarket.domain.model.product import DEFAULT_LOCATION, Product
from agromarket.domain.repository.product_repository import ProductRepository
from agromarket.infrastructure.persistence import records


class JsonProductRepository(ProductRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = records.find(self._rows, product_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(
        self,
        farmer_id: str | None = None,
        only_active: bool = False,
    ) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._rows]
        if farmer_id is not None:
            products = [p for p in products if p.farmer_id == farmer_id]
        if only_active:
            products = [p for p in products if p.active]
        return records.newest_first(products)

    def save(self, product: Product) -> None:
        records.upsert(self._rows, self._to_raw(product))

    def delete(self, product_id: str) -> None:
        records.remove(self._rows, product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "farmer_id": product.farmer_id,
            "name": product.name,
            "category": product.category,
            "price_range": product.price_range,
            "stock": product.stock,
            "availability": product.availability.value,
            "active": product.active,
            "harvest_window": product.harvest_window,
            "sustainability": product.sustainability,
            "highlights": list(product.highlights),
            "location": product.location,
            "image_url": product.image_url,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        availability = raw.get("availability")
        return Product(
            id=raw["id"],
            farmer_id=raw["farmer_id"],
            name=raw["name"],
            category=raw.get("category", ""),
            price_range=raw.get("price_range", ""),
            stock=raw["stock"],
            availability=AvailabilityTier(availability) if availability else None,
            active=raw.get("active", True),
            harvest_window=raw.get("harvest_window", ""),
            sustainability=raw.get("sustainability", ""),
            highlights=list(raw.get("highlights", [])),
            location=raw.get("location") or DEFAULT_LOCATION,
            image_url=raw.get("image_url"),
            created_at=records.parse_timestamp(raw["created_at"]),
        )
