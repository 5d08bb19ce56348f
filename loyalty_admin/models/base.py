"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().

There is no module-level engine. The application factory
builds one from Settings and keeps the session factory on
app.state, so tests and scripts can construct their own.
"""

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from loyalty_admin.config import Settings


# --- Base Model Class ---
# Every database model (Customer, AuditLog) inherits from this
# class. SQLAlchemy uses it to track all models and generate the
# correct SQL for table creation.
class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url) -> Engine:
    """
    Create an engine for the given URL.

    pool_pre_ping=True tests connections before using them,
    which handles cases where the database restarted or a
    connection went stale.
    """
    connect_args = {}
    is_sqlite = str(url).startswith("sqlite")
    if is_sqlite:
        connect_args["check_same_thread"] = False

    engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """
    Session factory bound to an engine.

    autocommit=False means the services explicitly control
    when changes are saved. autoflush=False means SQL is only
    sent when we flush or commit.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
    )


def engine_from_settings(settings: Settings) -> Engine:
    return build_engine(settings.database_url)


# --- Dependency for FastAPI ---
def get_db(request: Request):
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
