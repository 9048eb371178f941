"""Application service: List Products use case (query)."""

from __future__ import annotations

from agromarket.application.dto import ProductDTO, product_to_dto
from agromarket.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        farmer_id: str | None = None,
        only_active: bool = False,
    ) -> list[ProductDTO]:
        """List catalogue entries with the seller's display name."""
        with self._uow:
            products = self._uow.products.list_all(
                farmer_id=farmer_id, only_active=only_active
            )
            sellers = {f.id: f.name for f in self._uow.farmers.list_all()}
        return [product_to_dto(p, sellers.get(p.farmer_id)) for p in products]
