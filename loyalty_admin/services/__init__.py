"""Business logic services."""

from loyalty_admin.services.tiers import tier_of
from loyalty_admin.services.audit_recorder import AuditRecorder, AuditWriteResult
from loyalty_admin.services.audit_service import AuditService
from loyalty_admin.services.customer_service import CustomerService

__all__ = [
    "tier_of",
    "AuditRecorder",
    "AuditWriteResult",
    "AuditService",
    "CustomerService",
]
