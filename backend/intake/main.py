"""Intake API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map IntakeError → {success, message} JSON responses
    - Services built once per app from Settings and stored on app.state
    - API routes and the /api/* fallback registered BEFORE the static mount

Design Decisions:
    - Lifespan over @app.on_event: logging setup and client cleanup in one place
    - create_app(settings) factory: tests build isolated apps; module-level app for uvicorn
    - Serverless platforms import `app`; `python -m intake.main` runs uvicorn locally
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from intake.api.error_handlers import register_error_handlers
from intake.api.routes import email_check, health, not_found, quote_requests, reviews
from intake.config import Settings, get_settings
from intake.infrastructure.observability import setup_logging
from intake.services.container import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    services = app.state.services
    settings = services.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Storage: {services.store.backend_label}")
    if services.notifier.configured:
        logger.info("Email: configured")
    else:
        logger.warning("Email not configured - emails will be skipped")
    if not settings.admin_key:
        logger.warning("ADMIN_KEY not set - GET /api/requests is unauthenticated")
    yield
    await services.close()
    logger.info("Intake API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Intake API", version="1.0.0", lifespan=lifespan)
    app.state.services = build_services(settings)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(quote_requests.router)
    app.include_router(reviews.router)
    app.include_router(email_check.router)
    # ADR: fallback after every API router, before static files
    app.include_router(not_found.router)

    # html=True serves index.html for directory paths
    if os.path.isdir(settings.public_dir):
        app.mount(
            "/", StaticFiles(directory=settings.public_dir, html=True), name="static",
        )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    if not settings.is_serverless:
        uvicorn.run(app, host=settings.host, port=settings.port)
