"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from loyalty_admin.config import Settings
from loyalty_admin.main import create_app
from loyalty_admin.models import Base
from loyalty_admin.models.base import build_engine, build_session_factory, get_db
from loyalty_admin.services.customer_service import CustomerService
from loyalty_admin.services.audit_service import AuditService


# Use SQLite for tests — no external database needed.
TEST_SETTINGS = Settings({
    "DATABASE_URL": "sqlite:///./test.db",
    "DATABASE_PASSWORD": "not-used-by-sqlite",
})

engine = build_engine(TEST_SETTINGS.database_url)
TestSessionLocal = build_session_factory(engine)

app = create_app(TEST_SETTINGS)


class TickingClock:
    """Deterministic clock: every call is one second after the last."""

    def __init__(self, start=datetime(2026, 1, 1, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    """Open extra sessions, e.g. to play a concurrent writer."""
    return TestSessionLocal


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def customer_service(db_session, clock):
    return CustomerService(db_session, clock=clock)


@pytest.fixture
def audit_service(db_session):
    return AuditService(db_session)


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of its own engine.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
