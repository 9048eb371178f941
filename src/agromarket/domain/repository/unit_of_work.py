"""Unit of Work — the commit boundary shared by every repository.

Handlers open one unit of work per request::

    with uow:
        uow.products.batch_adjust(...)
        uow.orders.add(order)
        uow.commit()

Either everything done inside the block is committed together, or (on
an exception, or leaving the block without ``commit()``) none of it is.
Implementations also serialise units of work against each other, so a
check made inside the block still holds when the block commits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from agromarket.domain.repository.delivery_point_repository import (
    DeliveryPointRepository,
    FarmerRepository,
)
from agromarket.domain.repository.order_repository import OrderRepository
from agromarket.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    products: ProductRepository
    orders: OrderRepository
    delivery_points: DeliveryPointRepository
    farmers: FarmerRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""
