"""Unit tests for the availability tier policy."""

import pytest

from agromarket.domain.model.availability import AvailabilityTier, tier_for


class TestTierFor:

    @pytest.mark.parametrize(
        "stock, tier",
        [
            (0, AvailabilityTier.LOW),
            (39, AvailabilityTier.LOW),
            (40, AvailabilityTier.MEDIUM),
            (100, AvailabilityTier.MEDIUM),
            (101, AvailabilityTier.HIGH),
            (5000, AvailabilityTier.HIGH),
        ],
    )
    def test_boundaries(self, stock, tier):
        assert tier_for(stock) is tier

    def test_labels(self):
        assert [t.value for t in AvailabilityTier] == ["Low", "Medium", "High"]
