"""
Pydantic schemas for customer operations.

These define the API contract. Format validation of phone
numbers and names belongs to the calling layer; the service
only re-checks phone uniqueness.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from loyalty_admin.models.customer import POINTS_MAX, POINTS_MIN
from loyalty_admin.models.enums import Tier


# --- Request Schemas ---

class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=32)
    points: int = Field(default=0, ge=0, le=POINTS_MAX)

    @field_validator("name", "phone")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class CustomerUpdate(BaseModel):
    """
    Partial update. Only fields that are set are written.

    Supplying points recomputes the tier but does not touch
    points_redeemed or write a points audit entry; use the
    points adjustment endpoint for that.
    """
    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, min_length=1, max_length=32)
    points: int | None = Field(default=None, ge=POINTS_MIN, le=POINTS_MAX)

    @field_validator("name", "phone")
    @classmethod
    def must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v


class PointsAdjust(BaseModel):
    """Signed change to a balance. Positive adds, negative redeems."""
    delta: int = Field(ge=POINTS_MIN, le=POINTS_MAX)

    @field_validator("delta")
    @classmethod
    def delta_must_be_non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("delta must be non-zero")
        return v


# --- Response Schemas ---

class CustomerResponse(BaseModel):
    id: uuid.UUID
    name: str
    phone: str
    points: int
    points_redeemed: int
    tier: Tier
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerSummary(BaseModel):
    """Dashboard totals across all customers."""
    total_customers: int
    total_points: int
    total_redeemed: int
    tier_counts: dict[Tier, int]
    top_customers: list[CustomerResponse]


class PhoneExistsResponse(BaseModel):
    phone: str
    exists: bool
