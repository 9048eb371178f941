"""Application service: Place Order use case.

The only entry point that turns a cart into a committed order.  Stock
decrement and order creation share one unit of work, so either both are
committed or neither is.  Farmers are notified only after the commit,
through the dispatcher, and nothing that happens there can fail the
order.
"""

from __future__ import annotations

import structlog

from agromarket.application.dto import CartLineSpec, CustomerInfo, OrderDTO, order_to_dto
from agromarket.application.notification_templates import render_new_order
from agromarket.application.notifications import Notification, NotificationDispatcher
from agromarket.application.show_order import current_products
from agromarket.domain.exceptions import EmptyCartError, EntityNotFoundError, ValidationError
from agromarket.domain.model.logistics import DeliverySlot, Logistics, MeetingPoint, logistics_from
from agromarket.domain.model.order import Order, OrderLine
from agromarket.domain.model.value_objects import CustomerContact, Quantity
from agromarket.domain.repository.unit_of_work import UnitOfWork
from agromarket.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork, dispatcher: NotificationDispatcher) -> None:
        self._uow = uow
        self._dispatcher = dispatcher

    def handle(
        self,
        customer: CustomerInfo,
        delivery_slot: str,
        logistics_mode: str,
        cart: list[CartLineSpec],
        user_id: str | None = None,
        delivery_point_id: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Place a new order.

        Steps:
        1. Validate the request shape (cart, slot, logistics, contact).
        2. Inside one unit of work: reserve stock for every line, create
           the order, commit.
        3. Queue one notification per farmer with their lines only.
        4. Return the hydrated order.
        """
        # Step 1: validation that needs no store access
        if not cart:
            raise EmptyCartError()
        quantities = self._merge_cart(cart)
        slot = DeliverySlot.parse(delivery_slot)
        logistics = logistics_from(logistics_mode, delivery_point_id)
        contact = CustomerContact(customer.name, customer.email, customer.phone)

        # Step 2: reservation and creation as one commit
        with self._uow:
            self._check_delivery_point(logistics)

            reservation = InventoryReservationService(self._uow.products)
            reserved = reservation.reserve(list(quantities.items()))

            lines = [
                OrderLine(
                    product_id=product_id,
                    quantity=qty,
                    product_name=reserved[product_id].name,  # <-- name snapshot
                    farmer_id=reserved[product_id].farmer_id,
                )
                for product_id, qty in quantities.items()
            ]
            order = Order.create(
                lines=lines,
                delivery_slot=slot,
                logistics=logistics,
                customer=contact,
                user_id=user_id,
                notes=notes,
            )
            self._uow.orders.add(order)

            products = current_products(self._uow.products, [order])
            notifications = self._farmer_notifications(order)
            self._uow.commit()

        logger.info(
            "order.placed",
            order_id=order.id,
            total_items=order.total_items,
            products=len(lines),
        )

        # Step 3: fire-and-forget
        for notification in notifications:
            self._dispatcher.submit(notification)

        return order_to_dto(order, products)

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _merge_cart(cart: list[CartLineSpec]) -> dict[str, Quantity]:
        """Combine repeated products into one line, keeping first-seen order."""
        totals: dict[str, int] = {}
        for spec in cart:
            product_id = (spec.product_id or "").strip()
            if not product_id:
                raise ValidationError("Every cart line needs a product id")
            Quantity(spec.quantity)  # each line must be positive on its own
            totals[product_id] = totals.get(product_id, 0) + spec.quantity
        return {pid: Quantity(total) for pid, total in totals.items()}

    def _check_delivery_point(self, logistics: Logistics) -> None:
        if not isinstance(logistics, MeetingPoint):
            return
        point = self._uow.delivery_points.get_by_id(logistics.delivery_point_id)
        if point is None:
            raise EntityNotFoundError(
                f"Delivery point '{logistics.delivery_point_id}' not found"
            )
        if not point.active:
            raise ValidationError(f"Delivery point '{point.name}' is not active")

    def _farmer_notifications(self, order: Order) -> list[Notification]:
        """Build one message per farmer with an email on file."""
        notifications: list[Notification] = []
        for farmer_id in order.farmer_ids():
            farmer = self._uow.farmers.get_by_id(farmer_id)
            if farmer is None or not farmer.email:
                logger.warning(
                    "notification.no_recipient",
                    order_id=order.id,
                    farmer_id=farmer_id,
                )
                continue
            notifications.append(
                render_new_order(order, farmer.email, order.lines_for_farmer(farmer_id))
            )
        return notifications
