"""
Production FastAPI Application

Cinema reservation service: customers, halls, seats, movies, showtimes and tickets.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Cinema Service] Starting up...')

    tracing = TracingConfig(service_name='cinema-service')
    tracing.setup()
    Logger.base.info('📊 [Cinema Service] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Service] Dependency injection wired')

    # Schema is owned by alembic; the engine is created eagerly so it can be instrumented
    database = container.database()
    tracing.instrument_sqlalchemy(engine=database.engine)
    Logger.base.info('🗄️  [Cinema Service] Database engine ready + instrumented')

    Logger.base.info('✅ [Cinema Service] Startup complete')

    yield

    Logger.base.info('🛑 [Cinema Service] Shutting down...')

    await database.dispose()
    Logger.base.info('🗄️  [Cinema Service] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Cinema Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
