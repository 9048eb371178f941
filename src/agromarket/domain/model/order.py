"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines.  Lines are fixed at
creation time; afterwards only the status (and the cancellation fields
that travel with it) change.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from agromarket.domain.exceptions import (
    EmptyCartError,
    InvalidTransitionError,
    MissingReasonError,
)
from agromarket.domain.model.logistics import DeliverySlot, Logistics
from agromarket.domain.model.value_objects import CustomerContact, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# The single forward step allowed from each non-terminal status.
NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
}


def allowed_transitions(current: OrderStatus) -> set[OrderStatus]:
    """Statuses reachable from *current* in one step."""
    if current.is_terminal:
        return set()
    return {NEXT_STATUS[current], OrderStatus.CANCELLED}


@dataclass(frozen=True)
class OrderLine:
    """One product and quantity within an order.

    ``product_name`` and ``farmer_id`` are snapshots taken at placement so
    the line stays readable if the product is later renamed or removed.
    """

    product_id: str
    quantity: Quantity
    product_name: str = ""
    farmer_id: str | None = None


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str
    lines: list[OrderLine]
    delivery_slot: DeliverySlot
    logistics: Logistics
    customer: CustomerContact = field(default_factory=CustomerContact)
    user_id: str | None = None
    notes: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    cancellation_reason: str | None = None
    cancellation_viewed: bool = False
    total_items: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        lines: list[OrderLine],
        delivery_slot: DeliverySlot,
        logistics: Logistics,
        customer: CustomerContact | None = None,
        user_id: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order with a fresh id and timestamp."""
        if not lines:
            raise EmptyCartError()
        return Order(
            id=str(uuid.uuid4()),
            lines=list(lines),
            delivery_slot=delivery_slot,
            logistics=logistics,
            customer=customer or CustomerContact(),
            user_id=user_id or None,
            notes=(notes or "").strip() or None,
            total_items=sum(line.quantity.value for line in lines),
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(
        self,
        new_status: OrderStatus,
        cancellation_reason: str | None = None,
    ) -> OrderStatus:
        """Move to *new_status*, returning the status the order had before.

        Cancelling requires a non-empty reason.  Any other move clears a
        leftover reason so ``cancellation_reason`` is present exactly when
        the order is cancelled.
        """
        if new_status not in allowed_transitions(self.status):
            raise InvalidTransitionError(self.status.value, new_status.value)

        previous = self.status
        if new_status is OrderStatus.CANCELLED:
            reason = (cancellation_reason or "").strip()
            if not reason:
                raise MissingReasonError()
            self.cancellation_reason = reason
            self.cancellation_viewed = False
        else:
            self.cancellation_reason = None
        self.status = new_status
        return previous

    def mark_cancellation_viewed(self) -> bool:
        """Record that the customer has seen the cancellation.

        Returns True if the flag changed.
        """
        if self.status is not OrderStatus.CANCELLED or self.cancellation_viewed:
            return False
        self.cancellation_viewed = True
        return True

    # --- Queries --------------------------------------------------------------

    @property
    def short_id(self) -> str:
        return self.id[:8]

    @property
    def is_cancelled(self) -> bool:
        return self.status is OrderStatus.CANCELLED

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.user_id == user_id

    def lines_for_farmer(self, farmer_id: str) -> list[OrderLine]:
        return [line for line in self.lines if line.farmer_id == farmer_id]

    def farmer_ids(self) -> list[str]:
        """Farmers with products in this order, in line order."""
        seen: list[str] = []
        for line in self.lines:
            if line.farmer_id and line.farmer_id not in seen:
                seen.append(line.farmer_id)
        return seen
