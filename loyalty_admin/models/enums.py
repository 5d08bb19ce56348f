"""
Shared enumerations for database models.

Values are the lowercase labels stored in the database and
returned by the API. The database check constraint rejects
anything outside these sets.
"""

import enum


class Tier(str, enum.Enum):
    """Loyalty rank derived from the current point balance."""
    STANDARD = "standard"
    GOLD = "gold"
    PLATINUM = "platinum"


class ActionType(str, enum.Enum):
    """Kinds of administrative action recorded in the audit log."""
    CUSTOMER_CREATED = "customer_created"
    CUSTOMER_UPDATED = "customer_updated"
    CUSTOMER_DELETED = "customer_deleted"
    POINTS_ADDED = "points_added"
    POINTS_REDEEMED = "points_redeemed"
    # Accepted by the schema, never written by CustomerService
    TIER_CHANGED = "tier_changed"


class SortOption(str, enum.Enum):
    """Orderings offered by the customer list."""
    NEWEST = "newest"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    POINTS_HIGH = "points_high"
    POINTS_LOW = "points_low"


def enum_values(enum_class) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_class]
