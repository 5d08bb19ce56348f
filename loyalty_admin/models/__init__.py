"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from loyalty_admin.models.base import Base
from loyalty_admin.models.enums import ActionType, SortOption, Tier
from loyalty_admin.models.customer import Customer
from loyalty_admin.models.audit_log import AuditLog

__all__ = [
    "Base",
    "ActionType",
    "SortOption",
    "Tier",
    "Customer",
    "AuditLog",
]
