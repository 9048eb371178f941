"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from agromarket.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a quantity
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 latitude/longitude pair."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValidationError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValidationError(f"Longitude out of range: {self.longitude}")

    @staticmethod
    def of(latitude: float | None, longitude: float | None) -> Coordinates | None:
        """Build coordinates when both halves are present, else None."""
        if latitude is None or longitude is None:
            return None
        try:
            return Coordinates(float(latitude), float(longitude))
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Invalid coordinates: {latitude!r}, {longitude!r}"
            ) from exc

    def __str__(self) -> str:
        return f"{self.latitude:.6f},{self.longitude:.6f}"


@dataclass(frozen=True)
class CustomerContact:
    """How to reach the customer who placed an order.

    Every field is optional; notifications are only sent when an email
    address is present.
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        for attr in ("name", "email", "phone"):
            raw = getattr(self, attr)
            cleaned = raw.strip() if isinstance(raw, str) else raw
            object.__setattr__(self, attr, cleaned or None)
        if self.email is not None and "@" not in self.email:
            raise ValidationError(f"Invalid email address: {self.email!r}")

    @property
    def display_name(self) -> str:
        return self.name or "Customer"
