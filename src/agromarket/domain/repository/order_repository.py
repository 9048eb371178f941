"""Abstract repository for the Order aggregate — the order store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agromarket.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
)
from agromarket.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order (with its lines) by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order together with its lines."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order."""

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order and its lines."""

    # --- Guarded operations ---------------------------------------------------

    def get(self, order_id: str) -> Order:
        order = self.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return order

    def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        cancellation_reason: str | None = None,
    ) -> Order:
        """Apply a status transition checked against the stored status."""
        order = self.get(order_id)
        order.transition_to(new_status, cancellation_reason)
        self.save(order)
        return order

    def delete_owned(self, order_id: str, requester_id: str | None) -> None:
        """Delete a cancelled order on behalf of the customer who placed it."""
        order = self.get(order_id)
        if not order.is_owned_by(requester_id):
            raise ForbiddenError(f"You are not allowed to delete order '{order_id}'")
        if not order.is_cancelled:
            raise InvalidStateError(
                f"Only cancelled orders can be deleted "
                f"(order '{order_id}' is {order.status.value})"
            )
        self.delete(order_id)

    # --- Queries --------------------------------------------------------------

    def list_for_user(self, user_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.user_id == user_id]

    def list_for_farmer(self, farmer_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.lines_for_farmer(farmer_id)]

    def list_referencing_product(self, product_id: str) -> list[Order]:
        return [
            o for o in self.list_all()
            if any(line.product_id == product_id for line in o.lines)
        ]

    def unviewed_cancellations(self, user_id: str) -> list[Order]:
        return [
            o for o in self.list_for_user(user_id)
            if o.is_cancelled and not o.cancellation_viewed
        ]
