"""
FastAPI Application Entry Point

This module creates and configures the Local Library web application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests build their own app around a store of their choosing

2. Lifespan Events
   - startup: open the CatalogStore (engine + tables)
   - shutdown: close it (dispose the connection pool)

3. Exception Handlers
   - CatalogError (NotFound, SchemaViolation) -> error page with its status
   - Unknown routes -> 404 error page
   - Database and unexpected errors -> logged, 500 error page
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog import __version__
from catalog.config import Settings, get_settings
from catalog.errors import CatalogError
from catalog.routers import (
    authors_router,
    bookinstances_router,
    books_router,
    genres_router,
    home_router,
)
from catalog.store import CatalogStore
from catalog.templating import render_error

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    app_settings: Settings | None = None,
    store: CatalogStore | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to get_settings())
        store: Store to serve from. When omitted, one is built from
            app_settings.database_url. Either way the lifespan opens it on
            startup and closes it on shutdown.

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or settings
    store = store or CatalogStore(app_settings.database_url, echo=app_settings.db_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ----- STARTUP -----
        logger.info(f"Starting {app_settings.app_name}...")
        logger.info(f"Debug mode: {app_settings.debug}")
        store.open()

        yield  # Application runs here

        # ----- SHUTDOWN -----
        logger.info(f"Shutting down {app_settings.app_name}...")
        store.close()

    app = FastAPI(
        title=app_settings.app_name,
        description="Server-rendered catalog of authors, genres, books and book copies.",
        version=__version__,
        lifespan=lifespan,
    )
    # Reached by route handlers through catalog.dependencies.get_store
    app.state.store = store

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError) -> Response:
        """NotFound and SchemaViolation carry their own status and message."""
        logger.warning(f"{request.method} {request.url.path}: {exc.message} ({exc.status_code})")
        return render_error(request, exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.warning(f"{request.method} {request.url.path}: no such page")
            return render_error(request, "Not Found", exc.status_code)
        return render_error(request, str(exc.detail), exc.status_code)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> Response:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}", exc_info=exc)
        detail = str(exc) if app_settings.debug else None
        return render_error(
            request,
            "A database error occurred. Please try again later.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> Response:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        detail = str(exc) if app_settings.debug else None
        return render_error(
            request,
            "An internal error occurred.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail,
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(home_router)
    app.include_router(authors_router)
    app.include_router(genres_router)
    app.include_router(books_router)
    app.include_router(bookinstances_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the application is running and its store is open.",
    )
    async def health_check() -> dict:
        return {
            "status": "healthy" if store.is_open else "starting",
            "app": app_settings.app_name,
            "version": __version__,
            "environment": app_settings.environment,
            "store": {
                "open": store.is_open,
                "backend": "sqlite" if app_settings.is_sqlite else "sql",
            },
        }

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """The catalog is the whole site."""
        return RedirectResponse("/catalog", status_code=status.HTTP_302_FOUND)

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m catalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,  # Auto-reload on code changes
    )
