"""Geocoding port — optional enrichment for delivery points."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agromarket.domain.model.value_objects import Coordinates


class GeocodingError(Exception):
    """The geocoding service failed or answered with something unusable."""


class Geocoder(ABC):

    @abstractmethod
    def locate(self, address: str) -> Coordinates | None:
        """Best-effort coordinates for a free-text address."""

    @abstractmethod
    def describe(self, coordinates: Coordinates) -> str | None:
        """Best-effort address for a coordinate pair."""
