"""Application service: Add Product use case."""

from __future__ import annotations

import uuid

import structlog

from agromarket.application.dto import ProductDTO, product_to_dto
from agromarket.domain.model.product import DEFAULT_LOCATION, Product
from agromarket.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        farmer_id: str,
        name: str,
        category: str = "",
        price_range: str = "",
        stock: int = 0,
        active: bool = True,
        harvest_window: str = "",
        sustainability: str = "",
        highlights: list[str] | None = None,
        location: str | None = None,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Add a new listing to the catalogue.

        The availability tier is always derived from ``stock``; callers
        cannot choose it at creation time.
        """
        product = Product.create(
            product_id=str(uuid.uuid4()),
            farmer_id=farmer_id,
            name=name,
            stock=stock,
            category=category,
            price_range=price_range,
            active=active,
            harvest_window=harvest_window,
            sustainability=sustainability,
            highlights=list(highlights or []),
            location=location or DEFAULT_LOCATION,
            image_url=image_url or None,
        )

        with self._uow:
            farmer = self._uow.farmers.get_by_id(product.farmer_id)
            self._uow.products.save(product)
            self._uow.commit()

        logger.info(
            "product.added",
            product_id=product.id,
            farmer_id=product.farmer_id,
            stock=product.stock,
        )
        return product_to_dto(product, farmer.name if farmer else None)
