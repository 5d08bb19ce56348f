"""
Customer model.

A loyalty program member. The point balance, the running total
of redeemed points and the tier are stored together, and the
tier is never set independently of the balance. CustomerService
recomputes it on every point change.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, Enum as SAEnum, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from loyalty_admin.models.base import Base
from loyalty_admin.models.enums import Tier, enum_values


# Range of the 32-bit INTEGER columns holding balances
POINTS_MIN = -2**31
POINTS_MAX = 2**31 - 1


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True
    )
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points_redeemed: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    tier: Mapped[Tier] = mapped_column(
        SAEnum(
            Tier,
            name="tier_enum",
            values_callable=enum_values,
            create_constraint=True,
        ),
        nullable=False,
        default=Tier.STANDARD,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Customer {self.name} {self.points} ({self.tier.value})>"
