"""Application service: Transition Order use case.

Moves an order through pending -> confirmed -> preparing -> ready ->
delivered, or cancels it.  Cancelling restores the reserved stock in the
same unit of work as the status change, so a failure part-way leaves
neither the status nor any stock changed.
"""

from __future__ import annotations

import structlog

from agromarket.application.dto import OrderDTO, order_to_dto
from agromarket.application.notification_templates import render_order_cancelled
from agromarket.application.notifications import NotificationDispatcher
from agromarket.application.show_order import current_products
from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.order import OrderStatus
from agromarket.domain.repository.unit_of_work import UnitOfWork
from agromarket.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = structlog.get_logger(__name__)


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus((raw or "").strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status '{raw}' (expected one of: {choices})"
        ) from None


class TransitionOrderHandler:

    def __init__(self, uow: UnitOfWork, dispatcher: NotificationDispatcher) -> None:
        self._uow = uow
        self._dispatcher = dispatcher

    def handle(
        self,
        order_id: str,
        new_status: str,
        cancellation_reason: str | None = None,
    ) -> OrderDTO:
        status = parse_status(new_status)

        with self._uow:
            previous = self._uow.orders.get(order_id).status
            order = self._uow.orders.update_status(order_id, status, cancellation_reason)

            restored: list[tuple[str, int]] = []
            # Guard against restoring twice if the order was already cancelled
            if order.is_cancelled and previous is not OrderStatus.CANCELLED:
                svc = InventoryReservationService(self._uow.products)
                restored = svc.restore(order)

            products = current_products(self._uow.products, [order])
            self._uow.commit()

        for product_id, stock in restored:
            logger.info(
                "stock.restored",
                order_id=order.id,
                product_id=product_id,
                stock=stock,
            )
        logger.info(
            "order.transitioned",
            order_id=order.id,
            previous=previous.value,
            status=order.status.value,
        )

        if order.is_cancelled:
            if order.customer.email:
                self._dispatcher.submit(render_order_cancelled(order))
            else:
                logger.warning("notification.no_recipient", order_id=order.id)

        return order_to_dto(order, products)
