"""
Tier calculator.

The tier is a pure function of the current balance. There is
no hysteresis: dropping below a threshold drops the tier on
the next recomputation.
"""

from loyalty_admin.models.enums import Tier


GOLD_THRESHOLD = 1000
PLATINUM_THRESHOLD = 5000


def tier_of(points: int) -> Tier:
    """Map a point balance to its tier. Negative balances are standard."""
    if points >= PLATINUM_THRESHOLD:
        return Tier.PLATINUM
    if points >= GOLD_THRESHOLD:
        return Tier.GOLD
    return Tier.STANDARD
