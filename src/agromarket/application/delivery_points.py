"""Application services: delivery point management.

Farmers publish the meeting points customers can pick at checkout.
Geocoding is optional enrichment: missing coordinates are looked up
from the address, a missing address from the coordinates, and any
geocoder failure simply leaves the field empty.
"""

from __future__ import annotations

import uuid

import structlog

from agromarket.application.dto import (
    DeliveryPointChanges,
    DeliveryPointDTO,
    delivery_point_to_dto,
)
from agromarket.application.geocoding import Geocoder, GeocodingError
from agromarket.domain.exceptions import EntityNotFoundError, ForbiddenError
from agromarket.domain.model.delivery_point import DeliveryPoint
from agromarket.domain.model.value_objects import Coordinates
from agromarket.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def _locate(geocoder: Geocoder | None, address: str) -> Coordinates | None:
    if geocoder is None or not address.strip():
        return None
    try:
        return geocoder.locate(address)
    except GeocodingError as exc:
        logger.warning("geocoding.failed", direction="forward", address=address, error=str(exc))
        return None


def _describe(geocoder: Geocoder | None, coordinates: Coordinates) -> str | None:
    if geocoder is None:
        return None
    try:
        return geocoder.describe(coordinates)
    except GeocodingError as exc:
        logger.warning(
            "geocoding.failed",
            direction="reverse",
            coordinates=str(coordinates),
            error=str(exc),
        )
        return None


def _owned_point(uow: UnitOfWork, point_id: str, requester_id: str) -> DeliveryPoint:
    point = uow.delivery_points.get_by_id(point_id)
    if point is None:
        raise EntityNotFoundError(f"Delivery point '{point_id}' not found")
    if not point.is_owned_by(requester_id):
        raise ForbiddenError(f"You are not allowed to change delivery point '{point_id}'")
    return point


class AddDeliveryPointHandler:

    def __init__(self, uow: UnitOfWork, geocoder: Geocoder | None = None) -> None:
        self._uow = uow
        self._geocoder = geocoder

    def handle(
        self,
        farmer_id: str,
        name: str,
        address: str | None,
        zone: str,
        latitude: float | None = None,
        longitude: float | None = None,
        active: bool = True,
    ) -> DeliveryPointDTO:
        coordinates = Coordinates.of(latitude, longitude)
        address = (address or "").strip() or None

        # Enrichment happens before the unit of work so no lock is held
        # while waiting on the geocoder.
        if not address and coordinates is not None:
            address = _describe(self._geocoder, coordinates)
        if coordinates is None and address:
            coordinates = _locate(self._geocoder, address)

        point = DeliveryPoint.create(
            point_id=str(uuid.uuid4()),
            farmer_id=farmer_id,
            name=name,
            address=address,
            zone=zone,
            coordinates=coordinates,
            active=active,
        )
        with self._uow:
            self._uow.delivery_points.save(point)
            self._uow.commit()

        logger.info("delivery_point.added", point_id=point.id, farmer_id=point.farmer_id)
        return delivery_point_to_dto(point)


class UpdateDeliveryPointHandler:

    def __init__(self, uow: UnitOfWork, geocoder: Geocoder | None = None) -> None:
        self._uow = uow
        self._geocoder = geocoder

    def handle(
        self,
        point_id: str,
        requester_id: str,
        changes: DeliveryPointChanges,
    ) -> DeliveryPointDTO:
        coordinates = Coordinates.of(changes.latitude, changes.longitude)
        relocated = coordinates is not None
        # A new address without explicit coordinates invalidates the old ones
        if coordinates is None and changes.address:
            coordinates = _locate(self._geocoder, changes.address)
            relocated = True

        with self._uow:
            point = _owned_point(self._uow, point_id, requester_id)
            merged = DeliveryPoint.create(
                point_id=point.id,
                farmer_id=point.farmer_id,
                name=changes.name if changes.name is not None else point.name,
                address=changes.address if changes.address is not None else point.address,
                zone=changes.zone if changes.zone is not None else point.zone,
                coordinates=coordinates if relocated else point.coordinates,
                active=changes.active if changes.active is not None else point.active,
            )
            merged.created_at = point.created_at
            self._uow.delivery_points.save(merged)
            self._uow.commit()

        logger.info("delivery_point.updated", point_id=point_id)
        return delivery_point_to_dto(merged)


class DeleteDeliveryPointHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, point_id: str, requester_id: str) -> None:
        with self._uow:
            _owned_point(self._uow, point_id, requester_id)
            self._uow.delivery_points.delete(point_id)
            self._uow.commit()
        logger.info("delivery_point.deleted", point_id=point_id)


class ListDeliveryPointsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        farmer_id: str | None = None,
        zone: str | None = None,
        active_only: bool = False,
    ) -> list[DeliveryPointDTO]:
        with self._uow:
            points = self._uow.delivery_points.list_all(
                farmer_id=farmer_id, zone=zone, active_only=active_only
            )
        return [delivery_point_to_dto(p) for p in points]
