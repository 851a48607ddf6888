"""
FastAPI Application Entry Point

Builds the FastAPI app from injected settings, wires the database and the
access service, configures middleware and includes all routers.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from log_service.config import Settings, get_settings
from log_service.database import Database
from log_service.errors import LogServiceError
from log_service.routers import health, logs, tenants
from log_service.schema import create_schema
from log_service.services.access import AccessService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    access_service: Optional[AccessService] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        database: Database to use; a pool is built from ``settings`` when omitted
        access_service: Service to use; built on ``database`` when omitted
    """
    settings = settings or get_settings()
    database = database or Database(settings)
    access_service = access_service or AccessService(database, settings)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: open the connection pool and ensure the schema exists.
        Shutdown: close database connections gracefully.
        """
        logger.info(f"Starting {settings.app_name}...")
        await database.connect()
        if settings.auto_create_schema:
            await create_schema(database)
        logger.info(f"{settings.app_name} started successfully")

        yield

        logger.info(f"Shutting down {settings.app_name}...")
        await database.disconnect()
        logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        # Tenant Log Service API

        Multi-tenant log collection:

        - **Register** an application name to receive an app id and api key
        - **Submit** log entries into the application's own namespace
        - **Retrieve** entries, optionally for a single calendar day

        Every log field is sanitized before storage.
        """,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = database
    app.state.access_service = access_service

    # ========================================================================
    # Middleware
    # ========================================================================

    @app.middleware("http")
    async def add_request_timing(request: Request, call_next):
        """Add request timing header and log the request."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    @app.exception_handler(LogServiceError)
    async def log_service_error_handler(request: Request, exc: LogServiceError):
        """Render domain failures with their status and public detail."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler.

        Returns generic error responses to prevent information leakage.
        Detailed errors are logged internally.
        """
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    # ========================================================================
    # Routers
    # ========================================================================

    app.include_router(tenants.router)
    app.include_router(logs.router)
    app.include_router(health.router)
    app.include_router(tenants.legacy_router)
    app.include_router(logs.legacy_router)

    if settings.enable_metrics:
        app.add_api_route(
            settings.metrics_path,
            health.metrics,
            methods=["GET"],
            tags=["monitoring"]
        )

    @app.get("/", tags=["root"])
    async def root():
        """Basic service information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "status": "running"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "log_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers
    )
