"""Unit tests for the InventoryReservationService domain service
and the stock operations of the product store."""

import pytest

from agromarket.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from agromarket.domain.model.availability import AvailabilityTier
from agromarket.domain.model.logistics import DeliverySlot, PlatformDelivery
from agromarket.domain.model.order import Order, OrderLine
from agromarket.domain.model.product import Product
from agromarket.domain.model.value_objects import Quantity
from agromarket.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeProductRepository


def _make_products(*specs: tuple[str, str, int]) -> FakeProductRepository:
    """Create repo with (product_id, name, stock) tuples."""
    return FakeProductRepository([
        Product.create(product_id=pid, farmer_id="f1", name=name, stock=stock)
        for pid, name, stock in specs
    ])


def _make_order(*lines: tuple[str, int]) -> Order:
    return Order.create(
        lines=[OrderLine(product_id=pid, quantity=Quantity(qty)) for pid, qty in lines],
        delivery_slot=DeliverySlot.TUESDAY_PM,
        logistics=PlatformDelivery(),
    )


class TestReserve:

    def test_reserves_all_lines(self):
        repo = _make_products(("p1", "Tomatoes", 150), ("p2", "Lettuce", 50))
        svc = InventoryReservationService(repo)

        products = svc.reserve([("p1", Quantity(10)), ("p2", Quantity(5))])

        assert set(products) == {"p1", "p2"}
        assert repo.get_stock("p1") == 140
        assert repo.get_stock("p2") == 45

    def test_tier_recomputed_after_reserve(self):
        repo = _make_products(("p1", "Tomatoes", 150))
        InventoryReservationService(repo).reserve([("p1", Quantity(120))])
        assert repo.get("p1").availability is AvailabilityTier.LOW

    def test_insufficient_stock_rejected(self):
        repo = _make_products(("p1", "Tomatoes", 5))
        svc = InventoryReservationService(repo)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for Tomatoes"):
            svc.reserve([("p1", Quantity(10))])

    def test_all_or_nothing(self):
        repo = _make_products(("p1", "Tomatoes", 100), ("p2", "Lettuce", 5))
        svc = InventoryReservationService(repo)

        with pytest.raises(InsufficientStockError):
            svc.reserve([("p1", Quantity(50)), ("p2", Quantity(10))])

        # p1 must be untouched because p2 failed
        assert repo.get_stock("p1") == 100
        assert repo.get_stock("p2") == 5

    def test_missing_products_listed_together(self):
        repo = _make_products(("p1", "Tomatoes", 100))
        svc = InventoryReservationService(repo)

        with pytest.raises(ProductNotFoundError) as exc_info:
            svc.reserve([("ghost", Quantity(1)), ("p1", Quantity(1)), ("ghost2", Quantity(1))])

        assert exc_info.value.missing_ids == ["ghost", "ghost2"]
        assert repo.get_stock("p1") == 100

    def test_inactive_product_rejected(self):
        repo = _make_products(("p1", "Tomatoes", 100))
        product = repo.get("p1")
        product.active = False
        repo.save(product)

        with pytest.raises(ValidationError, match="not currently on sale"):
            InventoryReservationService(repo).reserve([("p1", Quantity(1))])

    def test_missing_products_reported_before_inactive_ones(self):
        repo = _make_products(("p1", "Tomatoes", 100))
        product = repo.get("p1")
        product.active = False
        repo.save(product)

        with pytest.raises(ProductNotFoundError) as exc_info:
            InventoryReservationService(repo).reserve(
                [("p1", Quantity(1)), ("ghost", Quantity(1))]
            )

        assert exc_info.value.missing_ids == ["ghost"]


class TestRestore:

    def test_restores_each_line(self):
        repo = _make_products(("p1", "Tomatoes", 40), ("p2", "Lettuce", 0))
        order = _make_order(("p1", 60), ("p2", 3))

        restored = InventoryReservationService(repo).restore(order)

        assert restored == [("p1", 100), ("p2", 3)]
        assert repo.get("p1").availability is AvailabilityTier.MEDIUM

    def test_skips_deleted_products(self):
        repo = _make_products(("p1", "Tomatoes", 10))
        order = _make_order(("p1", 5), ("gone", 7))

        restored = InventoryReservationService(repo).restore(order)

        assert restored == [("p1", 15)]


class TestBatchAdjust:

    def test_running_total_for_repeated_product(self):
        repo = _make_products(("p1", "Tomatoes", 10))

        with pytest.raises(InsufficientStockError) as exc_info:
            repo.batch_adjust([("p1", -6), ("p1", -6)])

        assert exc_info.value.available == 4
        assert exc_info.value.requested == 6
        assert repo.get_stock("p1") == 10

    def test_returns_new_stock_in_input_order(self):
        repo = _make_products(("p1", "Tomatoes", 10), ("p2", "Lettuce", 20))
        assert repo.batch_adjust([("p2", -5), ("p1", 3)]) == [15, 13]

    def test_adjust_stock_single(self):
        repo = _make_products(("p1", "Tomatoes", 10))
        assert repo.adjust_stock("p1", -10) == 0
        assert repo.get("p1").availability is AvailabilityTier.LOW

    def test_unknown_product(self):
        repo = _make_products()
        with pytest.raises(EntityNotFoundError):
            repo.get_stock("nope")
