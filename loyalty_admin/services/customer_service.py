"""
Customer service — the loyalty ledger.

This service owns every change to a customer record and keeps
three fields consistent with each other:
1. points is the current balance
2. points_redeemed only grows, by the size of each redemption
3. tier always equals tier_of(points)

Each mutation commits first and then writes its audit entry
through the AuditRecorder. Audit failures are logged and never
undo the mutation.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from loyalty_admin.exceptions import (
    ConcurrentUpdateError,
    CustomerNotFoundError,
    DuplicatePhoneError,
)
from loyalty_admin.models.customer import Customer, POINTS_MAX, POINTS_MIN
from loyalty_admin.models.enums import ActionType, SortOption, Tier
from loyalty_admin.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerSummary,
    CustomerUpdate,
)
from loyalty_admin.services.audit_recorder import AuditRecorder, AuditWriteResult
from loyalty_admin.services.store import store_call
from loyalty_admin.services.tiers import tier_of

logger = logging.getLogger(__name__)


# How many times adjust_points re-reads the balance after losing
# a race with another writer before giving up.
MAX_ADJUST_ATTEMPTS = 3

SORT_ORDER = {
    SortOption.NEWEST: (Customer.created_at.desc(), Customer.id.desc()),
    SortOption.NAME_ASC: (func.lower(Customer.name).asc(), Customer.id.asc()),
    SortOption.NAME_DESC: (func.lower(Customer.name).desc(), Customer.id.desc()),
    SortOption.POINTS_HIGH: (
        Customer.points.desc(), Customer.created_at.desc(), Customer.id.desc()
    ),
    SortOption.POINTS_LOW: (
        Customer.points.asc(), Customer.created_at.desc(), Customer.id.desc()
    ),
}


class CustomerService:
    """
    All customer mutations pass through this service.

    The service takes a database session as a constructor
    argument. Unlike a plain repository it commits its own
    work, because the audit entry must be written after the
    customer change is durable.
    """

    def __init__(
        self,
        db: Session,
        clock: Callable[[], datetime] | None = None,
        recorder: AuditRecorder | None = None,
    ):
        self.db = db
        self.clock = clock or datetime.utcnow
        self.recorder = recorder or AuditRecorder(db, clock=self.clock)

    # --- Reads ---

    def list_customers(
        self,
        tier: Tier | None = None,
        sort: SortOption = SortOption.NEWEST,
    ) -> list[Customer]:
        """Return customers, newest first unless another sort is given."""
        stmt = select(Customer)
        if tier is not None:
            stmt = stmt.where(Customer.tier == tier)
        stmt = stmt.order_by(*SORT_ORDER[sort])

        with store_call(self.db, "list_customers"):
            return list(self.db.execute(stmt).scalars().all())

    def search_customers(
        self,
        query: str,
        tier: Tier | None = None,
        sort: SortOption = SortOption.NEWEST,
    ) -> list[Customer]:
        """
        Case-insensitive substring search on name or phone.

        A blank query matches everything.
        """
        query = query.strip()
        if not query:
            return self.list_customers(tier=tier, sort=sort)

        stmt = select(Customer).where(
            Customer.name.icontains(query, autoescape=True)
            | Customer.phone.icontains(query, autoescape=True)
        )
        if tier is not None:
            stmt = stmt.where(Customer.tier == tier)
        stmt = stmt.order_by(*SORT_ORDER[sort])

        with store_call(self.db, "search_customers"):
            return list(self.db.execute(stmt).scalars().all())

    def get_customer(self, customer_id: uuid.UUID) -> Customer:
        with store_call(self.db, "get_customer"):
            customer = self.db.get(Customer, customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    def phone_exists(
        self, phone: str, exclude_id: uuid.UUID | None = None
    ) -> bool:
        """True if another customer already holds this exact trimmed phone."""
        stmt = select(Customer.id).where(Customer.phone == phone.strip())
        if exclude_id is not None:
            stmt = stmt.where(Customer.id != exclude_id)

        with store_call(self.db, "phone_exists"):
            return self.db.execute(stmt.limit(1)).first() is not None

    def summary(self, top: int = 6) -> CustomerSummary:
        """Totals and tier breakdown for the dashboard."""
        with store_call(self.db, "summary"):
            total_customers, total_points, total_redeemed = self.db.execute(
                select(
                    func.count(Customer.id),
                    func.coalesce(func.sum(Customer.points), 0),
                    func.coalesce(func.sum(Customer.points_redeemed), 0),
                )
            ).one()

            tier_counts = {tier: 0 for tier in Tier}
            rows = self.db.execute(
                select(Customer.tier, func.count(Customer.id))
                .group_by(Customer.tier)
            ).all()
            for tier, count in rows:
                tier_counts[tier] = count

            top_customers = self.db.execute(
                select(Customer)
                .order_by(*SORT_ORDER[SortOption.POINTS_HIGH])
                .limit(top)
            ).scalars().all()

        return CustomerSummary(
            total_customers=total_customers,
            total_points=total_points,
            total_redeemed=total_redeemed,
            tier_counts=tier_counts,
            top_customers=[
                CustomerResponse.model_validate(c) for c in top_customers
            ],
        )

    # --- Mutations ---

    def create_customer(self, request: CustomerCreate) -> Customer:
        """
        Create a customer with an opening balance.

        Writes a customer_created audit entry, plus points_added
        when the opening balance is positive.
        """
        name = request.name.strip()
        phone = request.phone.strip()

        if self.phone_exists(phone):
            raise DuplicatePhoneError(phone)

        customer = Customer(
            name=name,
            phone=phone,
            points=request.points,
            points_redeemed=0,
            tier=tier_of(request.points),
            created_at=self.clock(),
        )

        with store_call(self.db, "create_customer"):
            self.db.add(customer)
            try:
                self.db.commit()
            except IntegrityError as e:
                # Lost a race with another insert of the same phone
                self.db.rollback()
                raise DuplicatePhoneError(phone) from e
            self.db.refresh(customer)

        logger.info("Created customer %s (%s points)", customer.id, customer.points)

        self._audit(ActionType.CUSTOMER_CREATED, customer.id, customer.name)
        if customer.points > 0:
            self._audit(
                ActionType.POINTS_ADDED,
                customer.id,
                customer.name,
                points_change=customer.points,
            )
        return customer

    def update_customer(
        self, customer_id: uuid.UUID, request: CustomerUpdate
    ) -> Customer:
        """
        Apply a partial update to name, phone or points.

        The tier is only recomputed when points are part of the
        update. points_redeemed is left alone.
        """
        customer = self.get_customer(customer_id)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "phone" in changes:
            changes["phone"] = changes["phone"].strip()
            if self.phone_exists(changes["phone"], exclude_id=customer_id):
                raise DuplicatePhoneError(changes["phone"])

        with store_call(self.db, "update_customer"):
            for field, value in changes.items():
                setattr(customer, field, value)
            if "points" in changes:
                customer.tier = tier_of(changes["points"])
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise DuplicatePhoneError(changes.get("phone", customer.phone)) from e
            self.db.refresh(customer)

        logger.info("Updated customer %s: %s", customer.id, sorted(changes))

        self._audit(ActionType.CUSTOMER_UPDATED, customer.id, customer.name)
        return customer

    def adjust_points(self, customer_id: uuid.UUID, delta: int) -> Customer:
        """
        Add (delta > 0) or redeem (delta < 0) points.

        points, points_redeemed and tier are written in a single
        UPDATE guarded by the balance that was read. If another
        writer changed the balance in between, the UPDATE matches
        no row and the adjustment is retried against the fresh
        balance, up to MAX_ADJUST_ATTEMPTS times.
        """
        if delta == 0:
            raise ValueError("Point adjustment must be non-zero")

        for attempt in range(1, MAX_ADJUST_ATTEMPTS + 1):
            customer = self.get_customer(customer_id)
            old_points = customer.points
            old_redeemed = customer.points_redeemed

            new_points = old_points + delta
            if delta < 0:
                new_redeemed = old_redeemed + abs(delta)
            else:
                new_redeemed = old_redeemed
            if not POINTS_MIN <= new_points <= POINTS_MAX:
                raise ValueError(
                    f"Adjustment of {delta:+d} would take the balance of "
                    f"customer {customer_id} out of range"
                )
            if new_redeemed > POINTS_MAX:
                raise ValueError(
                    f"Adjustment of {delta:+d} would take the redeemed total "
                    f"of customer {customer_id} out of range"
                )
            new_tier = tier_of(new_points)

            with store_call(self.db, "adjust_points"):
                result = self.db.execute(
                    update(Customer)
                    .where(
                        Customer.id == customer_id,
                        Customer.points == old_points,
                        Customer.points_redeemed == old_redeemed,
                    )
                    .values(
                        points=new_points,
                        points_redeemed=new_redeemed,
                        tier=new_tier,
                    )
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 1:
                    self.db.commit()
                    self.db.refresh(customer)
                    break
                self.db.rollback()

            logger.warning(
                "Balance of customer %s changed during adjustment "
                "(attempt %d of %d)",
                customer_id, attempt, MAX_ADJUST_ATTEMPTS,
            )
        else:
            raise ConcurrentUpdateError(customer_id, MAX_ADJUST_ATTEMPTS)

        logger.info(
            "Adjusted points for customer %s by %+d (now %d, %s)",
            customer.id, delta, customer.points, customer.tier.value,
        )

        action = ActionType.POINTS_ADDED if delta > 0 else ActionType.POINTS_REDEEMED
        self._audit(action, customer.id, customer.name, points_change=delta)
        return customer

    def delete_customer(self, customer_id: uuid.UUID) -> bool:
        """
        Delete a customer, keeping its audit history.

        The customer_deleted entry is written while the row still
        exists, so its foreign key is valid at insert time. If the
        customer cannot be read, nothing is written.
        """
        customer = self.get_customer(customer_id)
        name = customer.name

        self._audit(ActionType.CUSTOMER_DELETED, customer_id, name)

        with store_call(self.db, "delete_customer"):
            self.db.delete(customer)
            self.db.commit()

        logger.info("Deleted customer %s (%s)", customer_id, name)
        return True

    def _audit(
        self,
        action_type: ActionType,
        customer_id: uuid.UUID,
        customer_name: str,
        points_change: int | None = None,
    ) -> AuditWriteResult:
        result = self.recorder.record(
            action_type, customer_id, customer_name, points_change=points_change
        )
        if not result.ok:
            logger.warning(
                "Audit entry %s dropped for customer %s: %s",
                action_type.value, customer_id, result.error,
            )
        return result
