"""Application service: Delete Cancelled Order use case.

No inventory change: stock was already restored when the order was
cancelled.
"""

from __future__ import annotations

import structlog

from agromarket.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteCancelledOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str, requester_id: str) -> None:
        with self._uow:
            self._uow.orders.delete_owned(order_id, requester_id)
            self._uow.commit()
        logger.info("order.deleted", order_id=order_id, requester_id=requester_id)
