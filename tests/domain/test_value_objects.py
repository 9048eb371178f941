"""Unit tests for domain value objects."""

import pytest

from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.value_objects import Coordinates, CustomerContact, Quantity


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        q = Quantity(5)
        assert q.value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_equality(self):
        assert Quantity(5) == Quantity(5)
        assert Quantity(5) != Quantity(6)


# ── Coordinates ──────────────────────────────────────────────────────────────


class TestCoordinates:

    def test_of_requires_both_halves(self):
        assert Coordinates.of(None, -73.1) is None
        assert Coordinates.of(-40.57, None) is None

    def test_of_builds_from_numbers(self):
        c = Coordinates.of(-40.57, -73.13)
        assert c == Coordinates(-40.57, -73.13)

    def test_latitude_out_of_range(self):
        with pytest.raises(ValidationError, match="Latitude"):
            Coordinates(91.0, 0.0)

    def test_longitude_out_of_range(self):
        with pytest.raises(ValidationError, match="Longitude"):
            Coordinates(0.0, -181.0)

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid coordinates"):
            Coordinates.of("north", "west")


# ── CustomerContact ──────────────────────────────────────────────────────────


class TestCustomerContact:

    def test_blank_fields_become_none(self):
        c = CustomerContact(name="  ", email="", phone=" +56 9 1234 ")
        assert c.name is None
        assert c.email is None
        assert c.phone == "+56 9 1234"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            CustomerContact(email="not-an-email")

    def test_display_name_falls_back(self):
        assert CustomerContact().display_name == "Customer"
        assert CustomerContact(name="Ana").display_name == "Ana"
