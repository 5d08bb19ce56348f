"""
Customer API endpoints.

The API layer is thin. It handles HTTP concerns and delegates
all bookkeeping to CustomerService, which commits its own work.
"""

import uuid

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from loyalty_admin.api.errors import SERVICE_ERRORS, to_http_exception
from loyalty_admin.models.base import get_db
from loyalty_admin.models.enums import SortOption, Tier
from loyalty_admin.schemas.audit import AuditLogResponse
from loyalty_admin.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerSummary,
    CustomerUpdate,
    PhoneExistsResponse,
    PointsAdjust,
)
from loyalty_admin.services.audit_service import AuditService
from loyalty_admin.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    q: str | None = None,
    tier: Tier | None = None,
    sort: SortOption = SortOption.NEWEST,
    db: Session = Depends(get_db),
):
    """List customers, or search by name/phone when q is given."""
    service = CustomerService(db)
    try:
        if q:
            return service.search_customers(q, tier=tier, sort=sort)
        return service.list_customers(tier=tier, sort=sort)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.get("/summary", response_model=CustomerSummary)
def customer_summary(
    top: int = Query(default=6, ge=0, le=100),
    db: Session = Depends(get_db),
):
    """Totals and tier breakdown for the dashboard."""
    try:
        return CustomerService(db).summary(top=top)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.get("/phone-exists", response_model=PhoneExistsResponse)
def phone_exists(
    phone: str = Query(min_length=1),
    exclude_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
):
    """Check whether a phone number is already registered."""
    try:
        exists = CustomerService(db).phone_exists(phone, exclude_id=exclude_id)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)
    return PhoneExistsResponse(phone=phone.strip(), exists=exists)


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    request: CustomerCreate,
    db: Session = Depends(get_db),
):
    """Create a new customer with an opening balance."""
    try:
        return CustomerService(db).create_customer(request)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    try:
        return CustomerService(db).get_customer(customer_id)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: uuid.UUID,
    request: CustomerUpdate,
    db: Session = Depends(get_db),
):
    """Update a customer's profile fields."""
    try:
        return CustomerService(db).update_customer(customer_id, request)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.post("/{customer_id}/points", response_model=CustomerResponse)
def adjust_points(
    customer_id: uuid.UUID,
    request: PointsAdjust,
    db: Session = Depends(get_db),
):
    """
    Add or redeem points.

    A positive delta adds points, a negative delta redeems
    them. The tier is recomputed from the new balance.
    """
    try:
        return CustomerService(db).adjust_points(customer_id, request.delta)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)


@router.delete("/{customer_id}", status_code=204)
def delete_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    """Delete a customer. Its audit history is kept."""
    try:
        CustomerService(db).delete_customer(customer_id)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)
    return Response(status_code=204)


@router.get("/{customer_id}/audit-logs", response_model=list[AuditLogResponse])
def customer_audit_logs(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    """Full history for one customer, including after deletion."""
    try:
        return AuditService(db).logs_for_customer(customer_id)
    except SERVICE_ERRORS as e:
        raise to_http_exception(e)
