"""
Loyalty Admin — FastAPI application.

This is the entry point for the application. The store handle
is built here from Settings and passed down through app.state;
nothing else creates an engine.

Run with:
    uvicorn loyalty_admin.main:create_app --factory
"""

import logging

from fastapi import FastAPI

from loyalty_admin.config import Settings, get_settings
from loyalty_admin.api.audit import router as audit_router
from loyalty_admin.api.customers import router as customers_router
from loyalty_admin.api.health import router as health_router
from loyalty_admin.models.base import build_session_factory, engine_from_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Missing store configuration raises ConfigurationError here,
    so a misconfigured process fails at startup.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Customer and loyalty points administration",
        debug=settings.DEBUG,
    )

    engine = engine_from_settings(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Register routers
    app.include_router(health_router)
    app.include_router(customers_router)
    app.include_router(audit_router)

    return app
