"""Abstract repository for the Product aggregate — the inventory store.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations provide row access; the stock
operations below are built on top of it and are only safe inside a
``UnitOfWork``, which serialises access to the store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from agromarket.domain.exceptions import EntityNotFoundError, InsufficientStockError
from agromarket.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        farmer_id: str | None = None,
        only_active: bool = False,
    ) -> list[Product]:
        """Return matching products, newest first."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product.  Deleting an unknown id is a no-op."""

    # --- Inventory operations -------------------------------------------------

    def get(self, product_id: str) -> Product:
        product = self.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return product

    def get_stock(self, product_id: str) -> int:
        return self.get(product_id).stock

    def adjust_stock(self, product_id: str, delta: int) -> int:
        """Apply a signed stock change and return the new stock."""
        return self.batch_adjust([(product_id, delta)])[0]

    def batch_adjust(self, adjustments: list[tuple[str, int]]) -> list[int]:
        """Apply every adjustment or none of them.

        All adjustments are checked against the current stock before any
        product is touched; a product listed twice sees the running total.
        Returns the new stock after each adjustment, in input order.
        """
        products: dict[str, Product] = {}
        running: dict[str, int] = {}
        results: list[int] = []

        # Phase 1: load and validate
        for product_id, delta in adjustments:
            if product_id not in products:
                products[product_id] = self.get(product_id)
                running[product_id] = products[product_id].stock
            new_stock = running[product_id] + delta
            if new_stock < 0:
                raise InsufficientStockError(
                    product_id=product_id,
                    product_name=products[product_id].name,
                    available=running[product_id],
                    requested=-delta,
                )
            running[product_id] = new_stock
            results.append(new_stock)

        # Phase 2: mutate and persist
        for product_id, product in products.items():
            product.set_stock(running[product_id])
            self.save(product)

        return results
