"""
FastAPI application factory.

The worker runs as a daemon thread inside the API process when
WORKER_ENABLED is true; it is started and stopped by the lifespan.

Usage:
    diff-voyager-server
    # or
    uvicorn diff_voyager.api.main:create_app --factory --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diff_voyager import __version__
from diff_voyager.app import Application
from diff_voyager.infra.identifiers import to_iso, utc_now
from diff_voyager.infra.settings import Settings

from .rate_limit import setup_rate_limiter
from .routers import jobs, projects, snapshots


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Starts the background worker on startup and stops it on shutdown,
    letting an in-flight job finish.
    """
    application: Application = app.state.application
    application.start()
    logger.info(f"Diff Voyager API started (data_dir={application.settings.data_dir})")

    yield

    application.stop()
    logger.info("Diff Voyager API shutdown complete")


tags_metadata = [
    {
        "name": "projects",
        "description": "Monitored targets - register, get and list projects",
    },
    {
        "name": "snapshots",
        "description": "Capture runs - create snapshots and follow their status",
    },
    {
        "name": "jobs",
        "description": "In-memory job queue - inspect and cancel capture jobs",
    },
]


def create_app(
    settings: Optional[Settings] = None,
    application: Optional[Application] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Runtime settings (default: Settings.from_env())
        application: Pre-built Application, mainly for tests

    Returns:
        Configured FastAPI app with the Application on app.state
    """
    if application is None:
        application = Application.create(settings or Settings.from_env())

    app = FastAPI(
        title="Diff Voyager API",
        description="Control plane for visual regression snapshots.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=tags_metadata,
    )
    app.state.application = application

    # CORS must wrap the limiter so 429 responses carry CORS headers
    setup_rate_limiter(app, application.settings.rate_limit)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed request bodies are client errors like domain validation
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__, "timestamp": to_iso(utc_now())}

    app.include_router(projects.router, prefix="/api", tags=["projects"])
    app.include_router(snapshots.router, prefix="/api", tags=["snapshots"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])

    return app
