"""
Audit log model.

Records every administrative action taken through
CustomerService. The log is the permanent history of the
program, including actions on customers that no longer exist.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    String, Integer, DateTime, ForeignKey,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from loyalty_admin.models.base import Base
from loyalty_admin.models.enums import ActionType, enum_values


class AuditLog(Base):
    """
    Immutable record of one administrative action.

    Audit logs are append-only. The application never updates
    or deletes a row.

    customer_id is a real foreign key and the database sets it
    to NULL when the customer is deleted. customer_ref and
    customer_name are copies taken at write time, so history
    stays attributable after the customer is gone.
    """

    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(primary_key=True)
    action_type: Mapped[ActionType] = mapped_column(
        SAEnum(
            ActionType,
            name="audit_action_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
        index=True,
    )
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
    )
    customer_ref: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, nullable=True, index=True
    )
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    points_change: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<AuditLog {self.action_type.value} {self.customer_name}>"
