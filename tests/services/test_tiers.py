"""
Tests for the tier calculator.
"""

import pytest
from hypothesis import given, strategies as st

from loyalty_admin.models.enums import Tier
from loyalty_admin.services.tiers import (
    GOLD_THRESHOLD,
    PLATINUM_THRESHOLD,
    tier_of,
)


@pytest.mark.parametrize("points, expected", [
    (-500, Tier.STANDARD),
    (0, Tier.STANDARD),
    (999, Tier.STANDARD),
    (1000, Tier.GOLD),
    (4999, Tier.GOLD),
    (5000, Tier.PLATINUM),
    (250_000, Tier.PLATINUM),
])
def test_thresholds(points, expected):
    assert tier_of(points) == expected


def test_threshold_constants():
    assert GOLD_THRESHOLD == 1000
    assert PLATINUM_THRESHOLD == 5000


@given(points=st.integers())
def test_tier_is_defined_for_every_integer(points):
    tier = tier_of(points)
    if points >= 5000:
        assert tier == Tier.PLATINUM
    elif points >= 1000:
        assert tier == Tier.GOLD
    else:
        assert tier == Tier.STANDARD


@given(points=st.integers(min_value=-10_000, max_value=10_000), drop=st.integers(min_value=1, max_value=10_000))
def test_no_hysteresis(points, drop):
    """Losing points never leaves a customer in a higher tier."""
    order = [Tier.STANDARD, Tier.GOLD, Tier.PLATINUM]
    assert order.index(tier_of(points - drop)) <= order.index(tier_of(points))
