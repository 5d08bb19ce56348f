"""
Audit service — read-only access to the audit log.

All queries return the most recent entries first. Entries for
a customer are found through the reference captured at write
time, so they remain visible after the customer is deleted.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from loyalty_admin.models.audit_log import AuditLog
from loyalty_admin.models.enums import ActionType
from loyalty_admin.services.store import store_call


DEFAULT_LIMIT = 50

NEWEST_FIRST = (AuditLog.created_at.desc(), AuditLog.id.desc())


class AuditService:

    def __init__(self, db: Session):
        self.db = db

    def recent_logs(self, limit: int = DEFAULT_LIMIT) -> list[AuditLog]:
        """Return the latest entries across all customers."""
        _check_limit(limit)
        stmt = select(AuditLog).order_by(*NEWEST_FIRST).limit(limit)
        with store_call(self.db, "recent_logs"):
            return list(self.db.execute(stmt).scalars().all())

    def logs_for_customer(self, customer_id: uuid.UUID) -> list[AuditLog]:
        """Return every entry about one customer, deleted or not."""
        stmt = (
            select(AuditLog)
            .where(AuditLog.customer_ref == customer_id)
            .order_by(*NEWEST_FIRST)
        )
        with store_call(self.db, "logs_for_customer"):
            return list(self.db.execute(stmt).scalars().all())

    def logs_by_action(
        self, action_type: ActionType, limit: int = DEFAULT_LIMIT
    ) -> list[AuditLog]:
        """Return the latest entries of one action type."""
        _check_limit(limit)
        stmt = (
            select(AuditLog)
            .where(AuditLog.action_type == action_type)
            .order_by(*NEWEST_FIRST)
            .limit(limit)
        )
        with store_call(self.db, "logs_by_action"):
            return list(self.db.execute(stmt).scalars().all())


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
