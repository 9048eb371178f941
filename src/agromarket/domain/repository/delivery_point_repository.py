"""Abstract repositories for farmer-owned reference data."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agromarket.domain.model.delivery_point import DeliveryPoint, Farmer


class DeliveryPointRepository(ABC):

    @abstractmethod
    def get_by_id(self, point_id: str) -> DeliveryPoint | None:
        """Return a delivery point by its ID, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        farmer_id: str | None = None,
        zone: str | None = None,
        active_only: bool = False,
    ) -> list[DeliveryPoint]:
        """Return matching delivery points, newest first."""

    @abstractmethod
    def save(self, point: DeliveryPoint) -> None:
        """Persist a new or updated delivery point."""

    @abstractmethod
    def delete(self, point_id: str) -> None:
        """Remove a delivery point."""


class FarmerRepository(ABC):

    @abstractmethod
    def get_by_id(self, farmer_id: str) -> Farmer | None:
        """Return a farmer by ID, or None if unknown."""

    @abstractmethod
    def list_all(self) -> list[Farmer]:
        """Return every registered farmer."""

    @abstractmethod
    def save(self, farmer: Farmer) -> None:
        """Persist a new or updated farmer."""
