"""Application service: Delete Product use case.

A listing cannot be removed while an open order still needs it;
finished orders keep a snapshot of the product name on each line.
"""

from __future__ import annotations

import structlog

from agromarket.domain.exceptions import ForbiddenError, InvalidStateError
from agromarket.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, requester_id: str) -> None:
        with self._uow:
            product = self._uow.products.get(product_id)
            if not product.is_owned_by(requester_id):
                raise ForbiddenError(
                    f"You are not allowed to delete product '{product_id}'"
                )

            open_orders = [
                o for o in self._uow.orders.list_referencing_product(product_id)
                if not o.status.is_terminal
            ]
            if open_orders:
                raise InvalidStateError(
                    f"{product.name} is part of {len(open_orders)} open order(s); "
                    f"deactivate it instead"
                )

            self._uow.products.delete(product_id)
            self._uow.commit()

        logger.info("product.deleted", product_id=product_id, farmer_id=requester_id)
