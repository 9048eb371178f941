"""Unit of work over the JSON document.

Entering the block takes the store lock and loads a private copy of the
document; repositories read and write that copy.  ``commit()`` writes it
back, and leaving the block releases the lock.
"""

from __future__ import annotations

import copy

from agromarket.domain.repository.unit_of_work import UnitOfWork
from agromarket.infrastructure.persistence.json_database import TABLES, JsonDatabase
from agromarket.infrastructure.persistence.json_delivery_point_repository import (
    JsonDeliveryPointRepository,
)
from agromarket.infrastructure.persistence.json_farmer_repository import (
    JsonFarmerRepository,
)
from agromarket.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from agromarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, database: JsonDatabase) -> None:
        self._database = database
        self._document: dict[str, list[dict]] = {}
        self._committed: dict[str, list[dict]] = {}

    def __enter__(self) -> JsonUnitOfWork:
        self._database.acquire()
        try:
            self._document = self._database.load()
        except Exception:
            self._database.release()
            raise
        self._committed = copy.deepcopy(self._document)

        self.products = JsonProductRepository(self._document["products"])
        self.orders = JsonOrderRepository(self._document["orders"])
        self.delivery_points = JsonDeliveryPointRepository(
            self._document["delivery_points"]
        )
        self.farmers = JsonFarmerRepository(self._document["farmers"])
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._database.release()

    def commit(self) -> None:
        self._database.persist(self._document)
        self._committed = copy.deepcopy(self._document)

    def rollback(self) -> None:
        # Restore in place; the repositories hold references to these lists
        for table in TABLES:
            self._document[table][:] = copy.deepcopy(self._committed.get(table, []))
