"""Availability policy: the coarse stock label shown in the catalogue.

The tier is a derivation of ``stock`` and is recomputed whenever stock
changes; no caller passes a tier in alongside a new stock count.
"""

from __future__ import annotations

from enum import Enum

HIGH_STOCK_ABOVE = 100
MEDIUM_STOCK_FROM = 40


class AvailabilityTier(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def tier_for(stock: int) -> AvailabilityTier:
    """Map a stock count to its availability tier.

    More than 100 units is High, 40 to 100 inclusive is Medium and
    anything below 40 is Low.
    """
    if stock > HIGH_STOCK_ABOVE:
        return AvailabilityTier.HIGH
    if stock >= MEDIUM_STOCK_FROM:
        return AvailabilityTier.MEDIUM
    return AvailabilityTier.LOW
