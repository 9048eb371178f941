"""Unit tests for the Product aggregate."""

import pytest

from agromarket.domain.exceptions import InsufficientStockError, ValidationError
from agromarket.domain.model.availability import AvailabilityTier
from agromarket.domain.model.product import DEFAULT_LOCATION, Product


def _product(stock: int = 50) -> Product:
    return Product.create(product_id="p1", farmer_id="f1", name="Tomatoes", stock=stock)


class TestProductCreation:

    def test_availability_derived_from_stock(self):
        assert _product(150).availability is AvailabilityTier.HIGH
        assert _product(50).availability is AvailabilityTier.MEDIUM
        assert _product(10).availability is AvailabilityTier.LOW

    def test_defaults(self):
        p = _product()
        assert p.active is True
        assert p.location == DEFAULT_LOCATION
        assert p.highlights == []

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _product(-1)

    def test_farmer_required(self):
        with pytest.raises(ValidationError, match="belong to a farmer"):
            Product.create(product_id="p1", farmer_id=" ", name="Tomatoes")

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create(product_id="p1", farmer_id="f1", name="")

    def test_persisted_availability_is_kept(self):
        p = Product(id="p1", farmer_id="f1", name="Kale", stock=10,
                    availability=AvailabilityTier.HIGH)
        assert p.availability is AvailabilityTier.HIGH


class TestProductStock:

    def test_set_stock_recomputes_tier(self):
        p = _product(150)
        p.set_stock(39)
        assert p.stock == 39
        assert p.availability is AvailabilityTier.LOW

    def test_adjust_stock_decrements(self):
        p = _product(100)
        assert p.adjust_stock(-60) == 40
        assert p.availability is AvailabilityTier.MEDIUM

    def test_adjust_stock_below_zero_rejected(self):
        p = _product(5)
        with pytest.raises(InsufficientStockError) as exc_info:
            p.adjust_stock(-10)
        assert exc_info.value.available == 5
        assert exc_info.value.requested == 10
        assert p.stock == 5

    def test_override_lasts_until_next_stock_change(self):
        p = _product(10)
        p.override_availability(AvailabilityTier.HIGH)
        assert p.availability is AvailabilityTier.HIGH
        p.set_stock(12)
        assert p.availability is AvailabilityTier.LOW


class TestProductOwnership:

    def test_owner(self):
        assert _product().is_owned_by("f1")

    def test_other_user(self):
        assert not _product().is_owned_by("f2")

    def test_anonymous(self):
        assert not _product().is_owned_by(None)
