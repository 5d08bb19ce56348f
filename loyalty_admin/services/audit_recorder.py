"""
Audit recorder — best-effort writes to the audit log.

An audit write is the second step of a mutation. The primary
change has already been committed, so a failure here must not
undo it or reach the caller as an error. Instead the recorder
rolls back its own work, logs the failure and hands back an
AuditWriteResult describing what happened.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from loyalty_admin.models.audit_log import AuditLog
from loyalty_admin.models.enums import ActionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditWriteResult:
    """Outcome of a single audit write, separate from the mutation's result."""
    action_type: ActionType
    ok: bool
    entry_id: int | None = None
    error: str | None = None


class AuditRecorder:

    def __init__(self, db: Session, clock: Callable[[], datetime] | None = None):
        self.db = db
        self.clock = clock or datetime.utcnow

    def record(
        self,
        action_type: ActionType,
        customer_id: uuid.UUID | None,
        customer_name: str,
        points_change: int | None = None,
    ) -> AuditWriteResult:
        """
        Append one audit entry and commit it.

        Never raises for store errors. The result reports whether
        the entry was written.
        """
        entry = AuditLog(
            action_type=action_type,
            customer_id=customer_id,
            customer_ref=customer_id,
            customer_name=customer_name,
            points_change=points_change,
            created_at=self.clock(),
        )
        try:
            self.db.add(entry)
            self.db.commit()
            entry_id = entry.id
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Failed to write audit entry %s for customer %s",
                action_type.value,
                customer_id,
                exc_info=True,
            )
            return AuditWriteResult(action_type=action_type, ok=False, error=str(e))

        logger.debug("Audit entry %s written (id=%s)", action_type.value, entry_id)
        return AuditWriteResult(action_type=action_type, ok=True, entry_id=entry_id)
