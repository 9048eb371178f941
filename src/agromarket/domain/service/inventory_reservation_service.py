"""Domain service: Inventory Reservation.

This service coordinates the cross-aggregate operation of reserving
stock for a new order or restoring it when an order is cancelled.  It
lives in the domain layer because the logic is a core business rule,
not just orchestration.

It must run inside an open ``UnitOfWork``: the checks it makes hold
only because nothing else can touch the store until that unit of work
commits or rolls back.
"""

from __future__ import annotations

import structlog

from agromarket.domain.exceptions import ProductNotFoundError, ValidationError
from agromarket.domain.model.order import Order
from agromarket.domain.model.product import Product
from agromarket.domain.model.value_objects import Quantity
from agromarket.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class InventoryReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, cart: list[tuple[str, Quantity]]) -> dict[str, Product]:
        """Decrement stock for every cart line, or for none of them.

        Uses a two-phase approach:
          Phase 1 — load and validate: every product exists and is on
                    sale.  Fails fast before any mutation.
          Phase 2 — ``batch_adjust`` re-checks stock for all lines and
                    only then writes.

        Returns the products by id, as loaded before the decrement.
        """
        products: dict[str, Product] = {}
        missing: list[str] = []

        # Phase 1: load all products; missing ids are reported before validation
        for product_id, _ in cart:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                missing.append(product_id)
            else:
                products[product_id] = product
        if missing:
            raise ProductNotFoundError(missing)
        for product in products.values():
            if not product.active:
                raise ValidationError(f"{product.name} is not currently on sale")

        # Phase 2: all-or-nothing stock decrement
        self._product_repo.batch_adjust(
            [(product_id, -qty.value) for product_id, qty in cart]
        )
        return products

    def restore(self, order: Order) -> list[tuple[str, int]]:
        """Give back the stock an order reserved.

        Lines whose product has since been deleted are skipped.  Returns
        ``(product_id, new_stock)`` for each product that was restored.
        """
        adjustments: list[tuple[str, int]] = []
        for line in order.lines:
            if self._product_repo.get_by_id(line.product_id) is None:
                logger.warning(
                    "stock.restore_skipped",
                    order_id=order.id,
                    product_id=line.product_id,
                    reason="product no longer exists",
                )
                continue
            adjustments.append((line.product_id, line.quantity.value))

        if not adjustments:
            return []
        new_stock = self._product_repo.batch_adjust(adjustments)
        return [(pid, stock) for (pid, _), stock in zip(adjustments, new_stock)]
