"""
FastAPI application entry point.
Wires the shared Database handle, routers and error handlers together.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from typing import Optional
import logging

from lightbnb.config import settings
from lightbnb.database import Database
from lightbnb.routers import users_router, properties_router, reservations_router
from lightbnb.services.error_handler import ErrorHandlerService
from lightbnb.utils.exceptions import LightBnBError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the connection pool on startup unless one was injected, and closes it on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)

    database: Database = app.state.database
    if await database.ping():
        port = database.engine.url.port
        logger.info(f"Connected to {database.name} db" + (f" on port {port}" if port else ""))
    else:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    if owns_database:
        await app.state.database.dispose()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    Args:
        database: Pool handle to use; created from settings at startup when omitted
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Property rental listings, reservations and user accounts.",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(users_router)
    app.include_router(properties_router, prefix=settings.api_prefix)
    app.include_router(reservations_router, prefix=settings.api_prefix)

    @app.exception_handler(LightBnBError)
    async def lightbnb_exception_handler(request: Request, exc: LightBnBError):
        """Handle LightBnB exceptions with structured error responses."""
        return ErrorHandlerService.handle_lightbnb_error(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors with detailed field information."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Health check endpoint with database connectivity test.
        """
        database: Database = request.app.state.database
        if not await database.ping():
            raise HTTPException(status_code=503, detail="Database connection failed")

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "database": "connected",
            "pool": database.pool_status(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lightbnb.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
