"""
Audit log API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from loyalty_admin.api.errors import SERVICE_ERRORS, to_http_exception
from loyalty_admin.models.base import get_db
from loyalty_admin.models.enums import ActionType
from loyalty_admin.schemas.audit import AuditLogResponse
from loyalty_admin.services.audit_service import AuditService, DEFAULT_LIMIT

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=list[AuditLogResponse])
def list_audit_logs(
    action_type: ActionType | None = None,
    limit: int = Query(default=DEFAULT_LIMIT, ge=0, le=500),
    db: Session = Depends(get_db),
):
    """
    Most recent audit entries, optionally filtered by action type.
    """
    service = AuditService(db)
    try:
        if action_type is not None:
            return service.logs_by_action(action_type, limit=limit)
        return service.recent_logs(limit=limit)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)
