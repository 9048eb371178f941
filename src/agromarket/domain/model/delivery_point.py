"""DeliveryPoint and Farmer — reference data owned by farmers.

Neither is mutated by order placement; a delivery point is only read to
check that a meeting-point order names a usable location.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from agromarket.domain.exceptions import ValidationError
from agromarket.domain.model.value_objects import Coordinates


@dataclass
class DeliveryPoint:
    id: str
    farmer_id: str
    name: str
    address: str | None
    zone: str
    coordinates: Coordinates | None = None
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        point_id: str,
        farmer_id: str,
        name: str,
        address: str | None,
        zone: str,
        coordinates: Coordinates | None = None,
        active: bool = True,
    ) -> DeliveryPoint:
        missing = [
            label
            for label, value in (
                ("farmer", farmer_id),
                ("name", name),
                ("zone", zone),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(
                "Delivery point requires: " + ", ".join(missing)
            )
        address = (address or "").strip() or None
        if address is None and coordinates is None:
            raise ValidationError("Delivery point requires an address or coordinates")
        return DeliveryPoint(
            id=point_id,
            farmer_id=farmer_id.strip(),
            name=name.strip(),
            address=address,
            zone=zone.strip(),
            coordinates=coordinates,
            active=active,
        )

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.farmer_id == user_id


@dataclass
class Farmer:
    """Directory entry used to address notifications and label listings."""

    id: str
    name: str
    email: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Farmer id is required")
        if self.email is not None:
            self.email = self.email.strip() or None
        if self.email is not None and "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")
