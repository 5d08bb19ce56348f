"""
Pydantic schemas for audit log responses.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel

from loyalty_admin.models.enums import ActionType


class AuditLogResponse(BaseModel):
    id: int
    action_type: ActionType
    customer_id: uuid.UUID | None
    customer_ref: uuid.UUID | None
    customer_name: str
    points_change: int | None
    created_at: datetime

    model_config = {"from_attributes": True}
