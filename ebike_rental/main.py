"""FastAPI application for the e-bike rental shop."""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings
from .core.errors import register_exception_handlers
from .core.logging_setup import configure_logging
from .core.monitoring import RequestMetrics, RequestMetricsMiddleware
from .db.session import SessionLocal, engine
from .models.base import Base
from .routers import admin, bookings, fixed_costs, garage, shop_settings, statistics
from .services import admin as admin_service
from .services import server_config as server_config_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(app.state.settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with SessionLocal() as session:
        options = await server_config_service.get_server_config(session, config=app.state.settings)
    server_config_service.apply_debug_mode(options.debug_mode)
    backup_task = asyncio.create_task(admin_service.auto_backup_loop(SessionLocal, config=app.state.settings))
    logger.info("E-bike rental API started (env=%s, db=%s)", app.state.settings.app_env, engine.url)
    yield
    backup_task.cancel()
    with suppress(asyncio.CancelledError):
        await backup_task
    await engine.dispose()
    logger.info("E-bike rental API stopped")


def create_app(config: Settings = settings) -> FastAPI:
    """Build the application with its own metrics instance."""

    app = FastAPI(title="E-Bike Rental API", version="0.1.0", lifespan=lifespan)
    app.state.settings = config
    app.state.metrics = RequestMetrics()

    app.add_middleware(
        RequestMetricsMiddleware,
        metrics=app.state.metrics,
        slow_request_ms=config.slow_request_ms,
    )
    if config.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    @app.get("/api/health", tags=["meta"])
    async def health() -> dict[str, str]:
        """Simple liveness check."""

        return {"status": "ok"}

    @app.head("/api/health", tags=["meta"])
    async def health_head() -> Response:
        """Allow HEAD for uptime monitors that only need the status code."""

        return Response(status_code=200)

    for router in (
        shop_settings.router,
        garage.router,
        bookings.router,
        fixed_costs.router,
        statistics.router,
        admin.router,
    ):
        app.include_router(router, prefix="/api")

    return app


app = create_app()
