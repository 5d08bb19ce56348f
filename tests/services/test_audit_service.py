"""
Tests for the AuditService and the AuditRecorder.
"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from loyalty_admin.exceptions import StoreUnavailableError
from loyalty_admin.models.audit_log import AuditLog
from loyalty_admin.models.enums import ActionType
from loyalty_admin.schemas.customer import CustomerCreate, CustomerUpdate
from loyalty_admin.services.audit_recorder import AuditRecorder


def make_customer(service, name, phone, points=0):
    return service.create_customer(CustomerCreate(
        name=name, phone=phone, points=points,
    ))


def seed_history(customer_service):
    """
    Two customers and a handful of actions, in this order:
    created(A), points_added(A, 200), created(B),
    points_redeemed(A, -50), updated(B)
    """
    a = make_customer(customer_service, "Aisyah", "+60 12-111 1111", points=200)
    b = make_customer(customer_service, "Benjamin", "+60 12-222 2222")
    customer_service.adjust_points(a.id, -50)
    customer_service.update_customer(b.id, CustomerUpdate(name="Ben"))
    return a, b


class TestRecentLogs:

    def test_newest_first(self, customer_service, audit_service):
        seed_history(customer_service)

        logs = audit_service.recent_logs()

        assert [log.action_type for log in logs] == [
            ActionType.CUSTOMER_UPDATED,
            ActionType.POINTS_REDEEMED,
            ActionType.CUSTOMER_CREATED,
            ActionType.POINTS_ADDED,
            ActionType.CUSTOMER_CREATED,
        ]

    def test_limit(self, customer_service, audit_service):
        seed_history(customer_service)

        logs = audit_service.recent_logs(limit=2)

        assert [log.action_type for log in logs] == [
            ActionType.CUSTOMER_UPDATED,
            ActionType.POINTS_REDEEMED,
        ]

    def test_zero_limit(self, customer_service, audit_service):
        seed_history(customer_service)
        assert audit_service.recent_logs(limit=0) == []

    def test_negative_limit_rejected(self, audit_service):
        with pytest.raises(ValueError, match="limit"):
            audit_service.recent_logs(limit=-1)

    def test_empty_log(self, audit_service):
        assert audit_service.recent_logs() == []


class TestLogsForCustomer:

    def test_only_that_customer(self, customer_service, audit_service):
        a, b = seed_history(customer_service)

        logs = audit_service.logs_for_customer(a.id)

        assert [log.action_type for log in logs] == [
            ActionType.POINTS_REDEEMED,
            ActionType.POINTS_ADDED,
            ActionType.CUSTOMER_CREATED,
        ]
        assert [log.points_change for log in logs] == [-50, 200, None]

    def test_names_are_captured_at_write_time(
        self, customer_service, audit_service
    ):
        a, b = seed_history(customer_service)

        logs = audit_service.logs_for_customer(b.id)

        assert [log.customer_name for log in logs] == ["Ben", "Benjamin"]

    def test_history_survives_deletion(self, customer_service, audit_service):
        a, b = seed_history(customer_service)
        a_id = a.id
        before = [
            (log.id, log.action_type, log.customer_name,
             log.points_change, log.created_at)
            for log in audit_service.logs_for_customer(a_id)
        ]

        customer_service.delete_customer(a_id)

        after = audit_service.logs_for_customer(a_id)
        assert after[0].action_type == ActionType.CUSTOMER_DELETED
        assert [
            (log.id, log.action_type, log.customer_name,
             log.points_change, log.created_at)
            for log in after[1:]
        ] == before

    def test_unknown_customer(self, customer_service, audit_service):
        seed_history(customer_service)
        assert audit_service.logs_for_customer(uuid.uuid4()) == []


class TestLogsByAction:

    def test_filter(self, customer_service, audit_service):
        seed_history(customer_service)

        logs = audit_service.logs_by_action(ActionType.CUSTOMER_CREATED)

        assert [log.customer_name for log in logs] == ["Benjamin", "Aisyah"]

    def test_filter_then_limit(self, customer_service, audit_service):
        seed_history(customer_service)

        logs = audit_service.logs_by_action(ActionType.CUSTOMER_CREATED, limit=1)

        assert [log.customer_name for log in logs] == ["Benjamin"]

    def test_tier_changed_is_never_emitted(self, customer_service, audit_service):
        a, b = seed_history(customer_service)
        customer_service.adjust_points(a.id, 6000)

        assert audit_service.logs_by_action(ActionType.TIER_CHANGED) == []


class TestQueryFailures:

    def test_store_failure_raises(self, audit_service, db_session, monkeypatch):
        def fail(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection reset"))
        monkeypatch.setattr(db_session, "execute", fail)

        with pytest.raises(StoreUnavailableError):
            audit_service.recent_logs()
        with pytest.raises(StoreUnavailableError):
            audit_service.logs_for_customer(uuid.uuid4())
        with pytest.raises(StoreUnavailableError):
            audit_service.logs_by_action(ActionType.POINTS_ADDED)


class TestAuditRecorder:

    def test_successful_write(self, db_session, clock):
        recorder = AuditRecorder(db_session, clock=clock)

        result = recorder.record(
            ActionType.POINTS_ADDED, None, "Walk-in", points_change=25
        )

        assert result.ok is True
        assert result.error is None
        entry = db_session.get(AuditLog, result.entry_id)
        assert entry.customer_name == "Walk-in"
        assert entry.points_change == 25
        assert entry.customer_id is None

    def test_failed_write_is_reported_not_raised(self, db_session, clock):
        AuditLog.__table__.drop(bind=db_session.get_bind())
        recorder = AuditRecorder(db_session, clock=clock)

        result = recorder.record(ActionType.CUSTOMER_CREATED, None, "Ghost")

        assert result.ok is False
        assert result.entry_id is None
        assert result.action_type == ActionType.CUSTOMER_CREATED
        assert "audit_logs" in result.error
