"""Integration tests for delivery point management and geocoding enrichment."""

import pytest

from agromarket.application.delivery_points import (
    AddDeliveryPointHandler,
    DeleteDeliveryPointHandler,
    ListDeliveryPointsHandler,
    UpdateDeliveryPointHandler,
)
from agromarket.application.dto import DeliveryPointChanges
from agromarket.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from agromarket.domain.model.value_objects import Coordinates
from tests.fakes import FakeGeocoder, FakeUnitOfWork

OSORNO = Coordinates(-40.5725, -73.1353)


def _add(uow, geocoder=None, **kwargs):
    kwargs.setdefault("farmer_id", "f1")
    kwargs.setdefault("name", "Feria Libre")
    kwargs.setdefault("address", "Calle Bulnes 500")
    kwargs.setdefault("zone", "Centro")
    return AddDeliveryPointHandler(uow, geocoder).handle(**kwargs)


class TestAddDeliveryPoint:

    def test_coordinates_filled_from_address(self):
        geocoder = FakeGeocoder(coordinates=OSORNO)

        dto = _add(FakeUnitOfWork(), geocoder)

        assert (dto.latitude, dto.longitude) == (OSORNO.latitude, OSORNO.longitude)
        assert geocoder.calls == [("locate", "Calle Bulnes 500")]

    def test_address_filled_from_coordinates(self):
        geocoder = FakeGeocoder(address="Plaza de Armas, Osorno")

        dto = _add(
            FakeUnitOfWork(), geocoder,
            address="", latitude=OSORNO.latitude, longitude=OSORNO.longitude,
        )

        assert dto.address == "Plaza de Armas, Osorno"
        assert geocoder.calls == [("describe", OSORNO)]

    def test_explicit_coordinates_are_not_looked_up(self):
        geocoder = FakeGeocoder(coordinates=Coordinates(0.0, 0.0))

        dto = _add(FakeUnitOfWork(), geocoder, latitude=-40.0, longitude=-73.0)

        assert (dto.latitude, dto.longitude) == (-40.0, -73.0)
        assert geocoder.calls == []

    def test_geocoder_failure_leaves_coordinates_empty(self):
        uow = FakeUnitOfWork()

        dto = _add(uow, FakeGeocoder(fail=True))

        assert dto.latitude is None and dto.longitude is None
        assert uow.delivery_points.get_by_id(dto.id) is not None

    def test_without_geocoder(self):
        dto = _add(FakeUnitOfWork())
        assert dto.latitude is None

    def test_reverse_lookup_failure_leaves_address_empty(self):
        uow = FakeUnitOfWork()

        dto = _add(uow, FakeGeocoder(fail=True), address="",
                   latitude=OSORNO.latitude, longitude=OSORNO.longitude)

        assert dto.address is None
        assert (dto.latitude, dto.longitude) == (OSORNO.latitude, OSORNO.longitude)
        assert uow.delivery_points.get_by_id(dto.id).address is None

    def test_address_or_coordinates_required(self):
        with pytest.raises(ValidationError, match="address or coordinates"):
            _add(FakeUnitOfWork(), FakeGeocoder(fail=True), address="")


class TestUpdateDeliveryPoint:

    def test_new_address_is_geocoded(self):
        uow = FakeUnitOfWork()
        dto = _add(uow, latitude=-40.0, longitude=-73.0)
        geocoder = FakeGeocoder(coordinates=OSORNO)

        updated = UpdateDeliveryPointHandler(uow, geocoder).handle(
            dto.id, "f1", DeliveryPointChanges(address="Av. Mackenna 1000")
        )

        assert updated.address == "Av. Mackenna 1000"
        assert (updated.latitude, updated.longitude) == (OSORNO.latitude, OSORNO.longitude)

    def test_new_address_without_match_clears_coordinates(self):
        uow = FakeUnitOfWork()
        dto = _add(uow, latitude=-40.0, longitude=-73.0)

        updated = UpdateDeliveryPointHandler(uow, FakeGeocoder(coordinates=None)).handle(
            dto.id, "f1", DeliveryPointChanges(address="Somewhere else")
        )

        assert updated.latitude is None

    def test_unchanged_fields_kept(self):
        uow = FakeUnitOfWork()
        dto = _add(uow, latitude=-40.0, longitude=-73.0)

        updated = UpdateDeliveryPointHandler(uow).handle(
            dto.id, "f1", DeliveryPointChanges(active=False)
        )

        assert updated.active is False
        assert updated.name == "Feria Libre"
        assert updated.latitude == -40.0

    def test_other_farmer_forbidden(self):
        uow = FakeUnitOfWork()
        dto = _add(uow)

        with pytest.raises(ForbiddenError):
            UpdateDeliveryPointHandler(uow).handle(dto.id, "f2", DeliveryPointChanges(name="X"))

    def test_unknown_point(self):
        with pytest.raises(EntityNotFoundError):
            UpdateDeliveryPointHandler(FakeUnitOfWork()).handle(
                "nope", "f1", DeliveryPointChanges(name="X")
            )


class TestDeleteAndListDeliveryPoints:

    def test_owner_deletes(self):
        uow = FakeUnitOfWork()
        dto = _add(uow)

        DeleteDeliveryPointHandler(uow).handle(dto.id, "f1")

        assert uow.delivery_points.get_by_id(dto.id) is None

    def test_other_farmer_forbidden(self):
        uow = FakeUnitOfWork()
        dto = _add(uow)

        with pytest.raises(ForbiddenError):
            DeleteDeliveryPointHandler(uow).handle(dto.id, "f2")

    def test_list_filters(self):
        uow = FakeUnitOfWork()
        _add(uow, name="Centro A")
        _add(uow, name="Rahue", zone="Rahue", active=False)
        _add(uow, farmer_id="f2", name="Otro")

        handler = ListDeliveryPointsHandler(uow)

        assert {p.name for p in handler.handle(farmer_id="f1")} == {"Centro A", "Rahue"}
        assert [p.name for p in handler.handle(zone="Rahue")] == ["Rahue"]
        assert {p.name for p in handler.handle(active_only=True)} == {"Centro A", "Otro"}
