"""
Main entrypoint for the Bookstore API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the resource routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn bookstore_api.app.main:app --port 80

The store connection is opened in the startup hook unless a
``Database`` is passed to ``create_app`` (as the tests do).
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, open_database, reset_schema
from .core.errors import INTERNAL_ERROR, MALFORMED_INPUT, APIError
from .core.logging_config import setup_logging
from .services.book_service import BookService
from .services.customer_service import CustomerService

logger = logging.getLogger(__name__)


def attach_database(app: FastAPI, db: Database) -> None:
    """Bind the store client and the services built on it to ``app``."""
    app.state.db = db
    app.state.book_service = BookService(db)
    app.state.customer_service = CustomerService(db)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ...}``."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Unparseable JSON or a body that is not an object.
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": MALFORMED_INPUT},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": INTERNAL_ERROR},
        )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment at import time.
    database : Optional[Database]
        An already open store client.  When omitted, one is opened from
        ``settings`` on startup and closed on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.include_router(api_router)
    register_exception_handlers(app)

    if database is not None:
        attach_database(app, database)

    @app.on_event("startup")
    async def startup_event() -> None:
        if database is None:
            attach_database(app, open_database(settings))
        if settings.reset_schema_on_startup:
            reset_schema(app.state.db)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        # Only close connections this app opened itself.
        if database is None and getattr(app.state, "db", None) is not None:
            app.state.db.close()
            logger.info("Database connection closed")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
