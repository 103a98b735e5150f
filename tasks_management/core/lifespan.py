"""Application lifespan: startup and shutdown.

Wiring of infrastructure only: logging, optional schema creation, engine
dispose and tracer shutdown. Tracing itself starts in create_app().
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tasks_management.core.config import Settings, get_settings
from tasks_management.infrastructure.persistence import database
from tasks_management.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


def start_telemetry(app: FastAPI, settings: Settings) -> None:
    """Install the tracer provider and instrument the app and the engine.

    Called from create_app(): request instrumentation is middleware and must
    be in place before the app starts serving.
    """
    from tasks_management.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    database.ensure_engine()
    assert database.engine is not None
    telemetry.instrument_sqlalchemy(database.engine)


def _stop_telemetry() -> None:
    from tasks_management.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and (optionally) tables; on exit dispose the engine and flush spans."""
    settings = get_settings()
    setup_logging()

    if settings.database_create_all:
        await database.create_all()
        logger.info("Database tables created")

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    await database.dispose_engine()
    if settings.telemetry_enabled:
        _stop_telemetry()
