"""UserHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserHubError → {"error": message} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and schema ensured on startup via lifespan
    - The observability sink is injected through create_app and stored on
      app.state; no module-level tracker state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static SPA assets served only in production, mounted AFTER API routes
      so /api/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from userhub import __version__
from userhub.api.error_handlers import register_error_handlers
from userhub.api.request_logging import RequestLoggingMiddleware
from userhub.api.routes import health, users
from userhub.config import Settings, get_settings
from userhub.core.observability_sink import ObservabilitySink
from userhub.infrastructure.database import close_db, init_db
from userhub.infrastructure.observability import LoggingSink, setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, sink: ObservabilitySink | None = None,
) -> FastAPI:
    """Build the FastAPI application for the given settings and sink."""
    settings = settings or get_settings()
    sink = sink or LoggingSink()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await manager.create_schema()
        logger.info(
            f"UserHub API started ({settings.environment.value}) "
            f"on port {settings.port}",
        )
        yield
        await close_db()
        logger.info("UserHub API shutting down")

    app = FastAPI(title="UserHub API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.sink = sink

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware, sink=sink)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)

    if settings.is_production and os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    return app


app = create_app()
