"""Application service: Update Product use case.

A farmer edits their own listing.  Supplying ``stock`` always recomputes
the availability tier; an explicit availability is only honoured as an
administrative override when stock is left unchanged.
"""

from __future__ import annotations

import structlog

from agromarket.application.dto import ProductChanges, ProductDTO, product_to_dto
from agromarket.domain.exceptions import ForbiddenError, ValidationError
from agromarket.domain.model.availability import AvailabilityTier
from agromarket.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

_TEXT_FIELDS = (
    "category",
    "price_range",
    "harvest_window",
    "sustainability",
    "location",
)


def parse_tier(raw: str) -> AvailabilityTier:
    for tier in AvailabilityTier:
        if tier.value.lower() == raw.strip().lower():
            return tier
    choices = ", ".join(t.value for t in AvailabilityTier)
    raise ValidationError(f"Unknown availability '{raw}' (expected one of: {choices})")


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        requester_id: str,
        changes: ProductChanges,
    ) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get(product_id)
            if not product.is_owned_by(requester_id):
                raise ForbiddenError(
                    f"You are not allowed to modify product '{product_id}'"
                )

            if changes.name is not None:
                if not changes.name.strip():
                    raise ValidationError("Product name is required")
                product.name = changes.name.strip()
            for attr in _TEXT_FIELDS:
                value = getattr(changes, attr)
                if value is not None:
                    setattr(product, attr, value)
            if changes.highlights is not None:
                product.highlights = list(changes.highlights)
            if changes.image_url is not None:
                product.image_url = changes.image_url or None
            if changes.active is not None:
                product.active = changes.active

            if changes.stock is not None:
                product.set_stock(changes.stock)
            elif changes.availability is not None:
                product.override_availability(parse_tier(changes.availability))

            self._uow.products.save(product)
            farmer = self._uow.farmers.get_by_id(product.farmer_id)
            self._uow.commit()

        logger.info(
            "product.updated",
            product_id=product.id,
            stock=product.stock,
            availability=product.availability.value,  # type: ignore[union-attr]
            active=product.active,
        )
        return product_to_dto(product, farmer.name if farmer else None)
