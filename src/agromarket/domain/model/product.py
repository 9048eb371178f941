"""Product aggregate.

A product is a farmer's listing in the catalogue.  It owns its stock
count and the availability tier derived from it; every change to
``stock`` goes through ``set_stock`` so the two never diverge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from agromarket.domain.exceptions import InsufficientStockError, ValidationError
from agromarket.domain.model.availability import AvailabilityTier, tier_for

DEFAULT_LOCATION = "Osorno"


@dataclass
class Product:
    """A farmer's listing.

    Invariants:
    - ``stock`` is never negative
    - ``availability`` equals ``tier_for(stock)`` unless an administrator
      overrode it after the last stock change

    The ``__init__`` accepts a persisted ``availability`` so repositories
    can reconstitute an override; new products should use ``create()``.
    """

    id: str
    farmer_id: str
    name: str
    category: str = ""
    price_range: str = ""
    stock: int = 0
    availability: AvailabilityTier | None = None
    active: bool = True
    harvest_window: str = ""
    sustainability: str = ""
    highlights: list[str] = field(default_factory=list)
    location: str = DEFAULT_LOCATION
    image_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.availability is None:
            self.availability = tier_for(self.stock)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        farmer_id: str,
        name: str,
        stock: int = 0,
        **attributes,
    ) -> Product:
        """Create a new listing, enforcing all invariants."""
        if not farmer_id or not farmer_id.strip():
            raise ValidationError("A product must belong to a farmer")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_stock(stock)
        return Product(
            id=product_id,
            farmer_id=farmer_id.strip(),
            name=name.strip(),
            stock=stock,
            **attributes,
        )

    # --- Stock ----------------------------------------------------------------

    def set_stock(self, stock: int) -> None:
        """Replace the stock count and recompute the availability tier."""
        _check_stock(stock)
        self.stock = stock
        self.availability = tier_for(stock)

    def adjust_stock(self, delta: int) -> int:
        """Apply a signed change to stock; reject anything that would go negative."""
        new_stock = self.stock + delta
        if new_stock < 0:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                requested=-delta,
            )
        self.set_stock(new_stock)
        return new_stock

    def override_availability(self, tier: AvailabilityTier) -> None:
        """Administrative override of the displayed tier.

        Lasts until the next stock change, which recomputes it.
        """
        self.availability = tier

    # --- Ownership ------------------------------------------------------------

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.farmer_id == user_id


def _check_stock(stock: int) -> None:
    if not isinstance(stock, int) or isinstance(stock, bool):
        raise ValidationError(f"Stock must be an integer, got {type(stock).__name__}")
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")
